import os
from datetime import UTC, datetime, timedelta
from pathlib import Path

import pytest
from protean.integrations.pytest import DomainFixture


def pytest_addoption(parser):
    parser.addoption(
        "--env",
        action="store",
        default="test",
        help="Config environment to run tests on",
    )


def pytest_sessionstart(session):
    """Pytest hook to run before collecting tests.

    Selects the config overlay from domain.toml before the domain is initialized.
    """
    os.environ["PROTEAN_ENV"] = session.config.option.env


def pytest_collection_modifyitems(config, items):
    """Automatically mark tests based on their directory location."""
    for item in items:
        test_path = str(Path(item.fspath))

        if "/domain/" in test_path:
            item.add_marker(pytest.mark.domain)
        elif "/application/" in test_path:
            item.add_marker(pytest.mark.application)
        elif "/bdd/" in test_path:
            item.add_marker(pytest.mark.bdd)
        elif "/integration/" in test_path:
            item.add_marker(pytest.mark.integration)
            # Integration tests are often slower
            if not any(m.name == "fast" for m in item.iter_markers()):
                item.add_marker(pytest.mark.slow)


@pytest.fixture(scope="session")
def marketplace_bed():
    from marketplace.domain import marketplace
    from marketplace.utils.db import drop_db, setup_db

    bed = DomainFixture(marketplace)
    bed.setup()
    setup_db(marketplace)
    yield bed
    drop_db(marketplace)
    bed.teardown()


@pytest.fixture(autouse=True)
def _ctx(marketplace_bed):
    """Run every test inside the domain context and clean up infrastructure after it."""
    with marketplace_bed.domain_context():
        yield

        from protean import current_domain

        # Clear all databases
        for _, provider in current_domain.providers.items():
            provider._data_reset()

        # Drain event stores
        current_domain.event_store.store._data_reset()


# ---------------------------------------------------------------------------
# Factories
# ---------------------------------------------------------------------------
NOW = datetime(2026, 6, 15, 12, 0, tzinfo=UTC)


@pytest.fixture()
def make_item():
    """Persist a catalog item. ``ratings`` is written directly, bypassing reviews.

    An item given ``ratings`` counts as rated by one review unless ``review_count`` says otherwise.
    """
    from protean import current_domain

    from marketplace.catalog.item import CatalogItem

    def _make(name="Item", shop_id="shop-1", ratings=None, review_count=None, **overrides):
        item = CatalogItem.create(shop_id=shop_id, name=name, **overrides)
        if ratings is not None:
            item.ratings = ratings
            item.review_count = 1 if review_count is None else review_count
        current_domain.repository_for(CatalogItem).add(item)
        return item

    return _make


@pytest.fixture()
def make_event(make_item):
    """Persist an event whose window is open around ``NOW`` unless dates are given."""

    def _make(name="Event", **overrides):
        overrides.setdefault("start_date", NOW - timedelta(days=1))
        overrides.setdefault("finish_date", NOW + timedelta(days=1))
        return make_item(name=name, item_type="Event", **overrides)

    return _make


@pytest.fixture()
def place_order():
    """Persist an order for ``user_id`` with one line per product."""
    from protean import current_domain

    from marketplace.ordering.order import Order

    def _place(user_id, *products, **overrides):
        cart = overrides.pop("cart", None) or [
            {"product_id": str(product.id), "quantity": 1, "price": product.effective_price or 0.0}
            for product in products
        ]
        order = Order.place(user_id=user_id, cart=cart, **overrides)
        current_domain.repository_for(Order).add(order)
        return order

    return _place


@pytest.fixture()
def now():
    """The reference moment the factories build event windows around."""
    return NOW
