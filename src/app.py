"""Marketplace FastAPI application.

Serves the review, catalog ranking, and order analytics endpoints. Every
request runs inside the marketplace domain context.

Usage:
    uvicorn app:app --app-dir src --host 0.0.0.0 --port 8000 --reload
"""

# ---------------------------------------------------------------------------
# Domain initialization
# ---------------------------------------------------------------------------
# PROTEAN_ENV selects the config overlay from marketplace/domain.toml
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from marketplace.domain import marketplace

marketplace.init()

from marketplace.api import (  # noqa: E402
    domain_context_middleware,
    event_router,
    order_router,
    product_router,
    register_error_handlers,
)

app = FastAPI(
    title="Marketplace API",
    description="Event reviews, catalog rankings, and order analytics",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.middleware("http")(domain_context_middleware)
register_error_handlers(app)

app.include_router(event_router)
app.include_router(product_router)
app.include_router(order_router)


@app.get("/health")
async def health():
    return JSONResponse(content={"status": "ok", "domain": marketplace.name})
