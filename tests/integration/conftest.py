import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from marketplace.api import (
    domain_context_middleware,
    event_router,
    order_router,
    product_router,
    register_error_handlers,
)


@pytest.fixture()
def client():
    app = FastAPI()
    app.middleware("http")(domain_context_middleware)
    register_error_handlers(app)
    app.include_router(event_router)
    app.include_router(product_router)
    app.include_router(order_router)
    return TestClient(app)
