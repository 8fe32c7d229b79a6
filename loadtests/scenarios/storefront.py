"""Storefront load test scenarios.

A browsing journey over the ranked listings and a buyer journey that reads
order history and reviews what it bought. Steps in the buyer journey execute
in order and each depends on the previous one succeeding.
"""

import random

from locust import SequentialTaskSet, TaskSet, task

from loadtests.data_generators import buyer_id, history_filters, latest_filters, review_data
from loadtests.helpers.response import extract_error_detail
from loadtests.helpers.state import BrowseState, BuyerState


class BrowseCatalogJourney(TaskSet):
    """Anonymous browsing across rankings, latest items, and events."""

    def on_start(self):
        self.state = BrowseState()

    @task(4)
    def latest(self):
        with self.client.get(
            "/products/latest",
            params=latest_filters(),
            catch_response=True,
            name="GET /products/latest",
        ) as resp:
            if resp.status_code == 200:
                self.state.shop_ids.update(item["shop_id"] for item in resp.json()["items"])
            else:
                resp.failure(f"Latest items failed: {extract_error_detail(resp)}")

    @task(2)
    def recommended(self):
        self.client.get("/products/recommended", name="GET /products/recommended")

    @task(2)
    def most_popular(self):
        self.client.get("/products/most-popular", name="GET /products/most-popular")

    @task(2)
    def top_offers(self):
        self.client.get("/products/top-offers", name="GET /products/top-offers")

    @task(3)
    def flash_sale(self):
        self.client.get("/events/flash-sale", name="GET /events/flash-sale")

    @task(1)
    def all_events(self):
        self.client.get("/events", name="GET /events")

    @task(1)
    def shop_events(self):
        if not self.state.shop_ids:
            return
        shop_id = random.choice(sorted(self.state.shop_ids))
        self.client.get(f"/events/shop/{shop_id}", name="GET /events/shop/{id}")

    @task(1)
    def stop(self):
        self.interrupt()


class BuyerReviewJourney(SequentialTaskSet):
    """History -> Order details -> Review an unreviewed line -> Resubmit -> Stats.

    Models a returning buyer rating something they ordered, then changing
    their mind. The resubmission must update the review in place.
    """

    def on_start(self):
        self.state = BuyerState(user_id=buyer_id())

    @property
    def headers(self):
        return {"X-User-Id": self.state.user_id}

    @task
    def order_history(self):
        with self.client.get(
            "/orders/history",
            params=history_filters(),
            headers=self.headers,
            catch_response=True,
            name="GET /orders/history",
        ) as resp:
            if resp.status_code != 200:
                resp.failure(f"Order history failed: {extract_error_detail(resp)}")
                self.interrupt()
                return

            for order in resp.json()["orders"]:
                self.state.order_ids.append(order["id"])
                self.state.reviewable.extend(
                    (line["product_id"], order["id"]) for line in order["cart"] if not line["is_reviewed"]
                )
            if not self.state.order_ids:
                self.interrupt()

    @task
    def order_details(self):
        order_id = random.choice(self.state.order_ids)
        with self.client.get(
            f"/orders/{order_id}",
            headers=self.headers,
            catch_response=True,
            name="GET /orders/{id}",
        ) as resp:
            if resp.status_code != 200:
                resp.failure(f"Order details failed: {extract_error_detail(resp)}")

    @task
    def submit_review(self):
        if not self.state.reviewable:
            return
        product_id, order_id = random.choice(self.state.reviewable)
        self.state.reviewable = [(product_id, order_id)]
        with self.client.put(
            "/events/reviews",
            json=review_data(product_id, order_id),
            headers=self.headers,
            catch_response=True,
            name="PUT /events/reviews",
        ) as resp:
            if resp.status_code == 200:
                self.state.reviews_submitted += 1
            elif resp.status_code == 404:
                # The product was removed from the catalog after the order
                self.state.reviewable = []
                resp.success()
            else:
                resp.failure(f"Submit review failed: {extract_error_detail(resp)}")

    @task
    def resubmit_review(self):
        if not self.state.reviewable or not self.state.reviews_submitted:
            return
        product_id, order_id = self.state.reviewable[0]
        with self.client.put(
            "/events/reviews",
            json=review_data(product_id, order_id),
            headers=self.headers,
            catch_response=True,
            name="PUT /events/reviews (update)",
        ) as resp:
            if resp.status_code != 200:
                resp.failure(f"Resubmit review failed: {extract_error_detail(resp)}")
            elif not resp.json()["review_updated"]:
                resp.failure("Resubmission created a second review")

    @task
    def order_stats(self):
        with self.client.get(
            "/orders/stats",
            headers=self.headers,
            catch_response=True,
            name="GET /orders/stats",
        ) as resp:
            if resp.status_code != 200:
                resp.failure(f"Order stats failed: {extract_error_detail(resp)}")

    @task
    def done(self):
        self.interrupt()
