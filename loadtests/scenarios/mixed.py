"""Mixed storefront workload scenario.

Browsing dominates real traffic; a smaller share of users are returning
buyers reading their orders and leaving reviews. This is the recommended
scenario for load baseline testing.
"""

from locust import HttpUser, between

from loadtests.scenarios.storefront import BrowseCatalogJourney, BuyerReviewJourney


class MixedWorkloadUser(HttpUser):
    """Realistic mixed workload.

    Browsing (75%): rankings, latest items, flash sale, and event listings.
    Buyers (25%): order history, details, review submission, and stats.

    Review submissions write to both the catalog item and the order, so this
    also measures how the reconciliation path holds up next to read traffic.
    """

    wait_time = between(0.5, 3.0)
    tasks = {
        BrowseCatalogJourney: 3,
        BuyerReviewJourney: 1,
    }


class ShopperUser(HttpUser):
    """Browse-only traffic, for measuring the ranking queries on their own."""

    wait_time = between(0.2, 1.0)
    tasks = [BrowseCatalogJourney]
