"""Application tests for the fixed catalog rankings and event listings."""

from datetime import timedelta

import pytest

from marketplace.catalog import ranking
from marketplace.catalog.item import EventStatus


def _names(cards):
    return [card["name"] for card in cards]


class TestRecommended:
    def test_orders_by_rating_then_units_sold(self, make_item):
        make_item("Good", ratings=4.0, sold_out=10)
        make_item("Best", ratings=5.0, sold_out=1)
        make_item("Good but popular", ratings=4.0, sold_out=50)

        assert _names(ranking.recommended()) == ["Best", "Good but popular", "Good"]

    def test_unrated_items_come_last(self, make_item):
        make_item("Unrated", sold_out=999)
        make_item("Rated", ratings=1.0)

        assert _names(ranking.recommended()) == ["Rated", "Unrated"]

    def test_capped_at_ranking_limit(self, make_item):
        for index in range(ranking.RANKING_LIMIT + 3):
            make_item(f"Item {index}", ratings=float(index % 5 + 1))

        assert len(ranking.recommended()) == ranking.RANKING_LIMIT

    def test_unrated_items_fill_open_places_by_units_sold(self, make_item):
        make_item("Slow", sold_out=1)
        make_item("Rated", ratings=2.0)
        make_item("Brisk", sold_out=30)

        assert _names(ranking.recommended()) == ["Rated", "Brisk", "Slow"]

    def test_rating_ties_at_the_cutoff_fall_back_to_units_sold(self, make_item):
        for index in range(ranking.RANKING_LIMIT + 2):
            make_item(f"Item {index}", ratings=4.0, sold_out=index)

        expected = [f"Item {index}" for index in range(ranking.RANKING_LIMIT + 1, 1, -1)]
        assert _names(ranking.recommended()) == expected

    def test_empty_catalog(self):
        assert ranking.recommended() == []


class TestMostPopular:
    def test_orders_by_units_sold_then_rating(self, make_item):
        make_item("Steady", sold_out=20, ratings=3.0)
        make_item("Hit", sold_out=100, ratings=2.0)
        make_item("Loved", sold_out=20, ratings=5.0)

        assert _names(ranking.most_popular()) == ["Hit", "Loved", "Steady"]

    def test_includes_events(self, make_item, make_event):
        make_item("Mug", sold_out=5)
        make_event("Jazz Night", sold_out=50)

        assert _names(ranking.most_popular()) == ["Jazz Night", "Mug"]

    def test_units_sold_ties_at_the_cutoff_fall_back_to_rating(self, make_item):
        for index in range(ranking.RANKING_LIMIT + 2):
            make_item(f"Item {index}", sold_out=5, ratings=1.0 + index * 0.25)
        make_item("Unrated", sold_out=5)

        expected = [f"Item {index}" for index in range(ranking.RANKING_LIMIT + 1, 1, -1)]
        assert _names(ranking.most_popular()) == expected


class TestTopOffers:
    def test_orders_by_discount_percentage(self, make_item):
        make_item("Ten off", original_price=100.0, discount_price=90.0)
        make_item("Half off", original_price=100.0, discount_price=50.0)
        make_item("Quarter off", original_price=40.0, discount_price=30.0)

        offers = ranking.top_offers()

        assert _names(offers) == ["Half off", "Quarter off", "Ten off"]
        assert offers[0]["discount_percentage"] == pytest.approx(50.0)

    def test_items_without_a_percentage_are_excluded(self, make_item):
        make_item("No discount", original_price=100.0)
        make_item("No original", discount_price=10.0)
        make_item("Free", original_price=0.0, discount_price=0.0)
        make_item("On sale", original_price=10.0, discount_price=8.0)

        assert _names(ranking.top_offers()) == ["On sale"]


class TestFlashSale:
    def test_only_running_events_inside_their_window(self, make_event, make_item, now):
        make_event("Live")
        make_event("Upcoming", start_date=now + timedelta(days=1), finish_date=now + timedelta(days=2))
        make_event("Finished", start_date=now - timedelta(days=3), finish_date=now - timedelta(days=2))
        make_event("Ended early", status=EventStatus.ENDED.value)
        make_item("Mug")

        assert _names(ranking.flash_sale(now=now)) == ["Live"]

    def test_capped_at_ranking_limit(self, make_event, now):
        for index in range(ranking.RANKING_LIMIT + 2):
            make_event(f"Live {index}")

        assert len(ranking.flash_sale(now=now)) == ranking.RANKING_LIMIT

    def test_earliest_listed_events_come_first(self, make_event, now):
        # Persisted latest-listed first
        for index in reversed(range(ranking.RANKING_LIMIT + 2)):
            make_event(f"Live {index}", created_at=now - timedelta(hours=24 - index))

        expected = [f"Live {index}" for index in range(ranking.RANKING_LIMIT)]
        assert _names(ranking.flash_sale(now=now)) == expected

    def test_naive_now_is_treated_as_utc(self, make_event, now):
        make_event("Live")

        assert _names(ranking.flash_sale(now=now.replace(tzinfo=None))) == ["Live"]


class TestEventListings:
    def test_all_events_newest_first(self, make_event, make_item, now):
        make_event("Old", created_at=now - timedelta(days=2))
        make_event("New", created_at=now)
        make_item("Mug", created_at=now + timedelta(days=1))

        assert _names(ranking.all_events()) == ["New", "Old"]

    def test_shop_events(self, make_event):
        make_event("Ours", shop_id="shop-1")
        make_event("Theirs", shop_id="shop-2")

        assert _names(ranking.shop_events("shop-1")) == ["Ours"]

    def test_cards_carry_review_count(self, make_event):
        make_event("Jazz Night")

        card = ranking.all_events()[0]
        assert card["review_count"] == 0
        assert card["ratings"] is None
        assert card["status"] == EventStatus.RUNNING.value
