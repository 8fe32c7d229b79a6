"""Shared BDD fixtures and step definitions for review reconciliation."""

import pytest
from protean import current_domain
from pytest_bdd import given, parsers, then

from marketplace.catalog.item import CatalogItem
from marketplace.ordering.order import Order


@pytest.fixture()
def world():
    """Names to identities, plus the last receipt."""
    return {"items": {}, "orders": {}, "receipt": None}


# ---------------------------------------------------------------------------
# Given steps
# ---------------------------------------------------------------------------
@given(parsers.cfparse('an event "{name}" with no reviews'))
def event_without_reviews(world, make_event, name):
    world["items"][name] = str(make_event(name).id)


@given(parsers.cfparse('buyer "{buyer}" has an order containing "{name}"'))
def buyer_has_order(world, place_order, buyer, name):
    item = current_domain.repository_for(CatalogItem).get(world["items"][name])
    world["orders"][buyer] = str(place_order(buyer, item).id)


# ---------------------------------------------------------------------------
# Then steps
# ---------------------------------------------------------------------------
@then(parsers.cfparse('"{name}" has {count:d} review'))
def item_review_count(world, name, count):
    item = current_domain.repository_for(CatalogItem).get(world["items"][name])
    assert len(item.reviews) == count


@then(parsers.cfparse('"{name}" is rated {rating:f}'))
def item_is_rated(world, name, rating):
    item = current_domain.repository_for(CatalogItem).get(world["items"][name])
    assert item.ratings == pytest.approx(rating)


def _lines(world, name):
    product_id = world["items"][name]
    for order_id in world["orders"].values():
        order = current_domain.repository_for(Order).get(order_id)
        yield from order.lines_for(product_id)


@then(parsers.cfparse('the order line for "{name}" is reviewed'))
def order_line_reviewed(world, name):
    lines = list(_lines(world, name))
    assert lines and all(line.is_reviewed for line in lines)


@then(parsers.cfparse('the order line for "{name}" is not reviewed'))
def order_line_not_reviewed(world, name):
    lines = list(_lines(world, name))
    assert lines and not any(line.is_reviewed for line in lines)


@then(parsers.cfparse('the order sync outcome is "{outcome}"'))
def order_sync_outcome(world, outcome):
    assert world["receipt"]["order_sync"] == outcome
