"""Faker-based data generators for Locust load test scenarios and seeding.

Payloads pass the domain's validation rules (ratings 1-5, event windows with
start before finish, discount never above the original price) and match the
field names expected by the API's Pydantic request schemas.
"""

import os
import random
from datetime import UTC, datetime, timedelta

from faker import Faker

fake = Faker()

CATEGORIES = ["music", "food", "art", "kitchen", "garden", "books"]

# ---------- Buyers ----------


def buyer_pool() -> list[str]:
    """Buyer identities shared by the seeder and the scenarios.

    Override the pool size with LOADTEST_BUYERS.
    """
    size = int(os.environ.get("LOADTEST_BUYERS", "50"))
    return [f"loadtest-buyer-{index:03d}" for index in range(size)]


def buyer_id() -> str:
    return random.choice(buyer_pool())


def buyer_name() -> str:
    return fake.name()[:100]


# ---------- Catalog ----------


def image_data() -> dict:
    key = fake.uuid4()
    return {"url": f"https://cdn.example.com/items/{key}.jpg", "key": key}


def price_pair() -> tuple[float | None, float | None]:
    """(original_price, discount_price); either may be missing on legacy listings."""
    original = round(random.uniform(5.0, 250.0), 2)
    roll = random.random()
    if roll < 0.1:
        return None, original
    if roll < 0.4:
        return original, None
    return original, round(original * random.uniform(0.3, 1.0), 2)


def item_data(shop_id: str | None = None, as_event: bool = False) -> dict:
    """Keyword arguments for ``CatalogItem.create``."""
    original, discount = price_pair()
    data = {
        "shop_id": shop_id or f"shop-{random.randint(1, 10):02d}",
        "name": fake.catch_phrase()[:255],
        "description": fake.paragraph(nb_sentences=3),
        "category": random.choice(CATEGORIES),
        "item_type": "Event" if as_event else "Product",
        "original_price": original,
        "discount_price": discount,
        "stock": random.randint(0, 500),
        "sold_out": random.randint(0, 2000),
        "images": [image_data() for _ in range(random.randint(0, 3))],
        "created_at": datetime.now(UTC) - timedelta(minutes=random.randint(0, 60 * 24 * 90)),
    }
    if as_event:
        start = datetime.now(UTC) + timedelta(days=random.randint(-10, 10))
        data["start_date"] = start
        data["finish_date"] = start + timedelta(days=random.randint(1, 14))
        data["status"] = random.choice(["Running", "Running", "Running", "Ended"])
    return data


# ---------- Orders ----------

ORDER_STATUSES = [
    "Processing",
    "Transferred to delivery partner",
    "Shipping",
    "On the way",
    "Delivered",
    "Processing refund",
    "Refund Success",
]


def cart_data(items: list, max_lines: int = 4) -> list[dict]:
    """Cart lines for ``Order.place`` drawn from persisted catalog items."""
    chosen = random.sample(items, k=min(len(items), random.randint(1, max_lines)))
    return [
        {
            "product_id": str(item.id),
            "quantity": random.randint(1, 3),
            "price": item.effective_price or 0.0,
        }
        for item in chosen
    ]


def random_status() -> str:
    return random.choice(ORDER_STATUSES)


def order_created_at() -> datetime:
    """Spread over the last year so the six-month window has something on both sides."""
    return datetime.now(UTC) - timedelta(days=random.randint(0, 365), minutes=random.randint(0, 1440))


# ---------- Reviews ----------


def review_data(product_id: str, order_id: str) -> dict:
    """SubmitReviewRequest payload."""
    return {
        "product_id": product_id,
        "order_id": order_id,
        "rating": random.randint(1, 5),
        "comment": fake.sentence(nb_words=12),
        "user_name": buyer_name(),
    }


def history_filters() -> dict:
    """Query parameters for GET /orders/history."""
    params = {"page": str(random.randint(1, 3)), "limit": str(random.choice([5, 10, 20]))}
    if random.random() < 0.3:
        params["status"] = random.choice(ORDER_STATUSES)
    if random.random() < 0.3:
        params["start_date"] = (datetime.now(UTC) - timedelta(days=random.randint(30, 200))).isoformat()
    return params


def latest_filters() -> dict:
    """Query parameters for GET /products/latest, sentinels included."""
    return {
        "store_id": random.choice(["0", f"shop-{random.randint(1, 10):02d}"]),
        "category_id": random.choice(["0", *CATEGORIES]),
        "type": random.choice(["all", "Product", "Event"]),
        "offset": str(random.choice([0, 10, 20])),
        "limit": "10",
    }
