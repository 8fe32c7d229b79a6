"""Seed catalog items and orders for the load test buyer pool.

Writes through the domain, so run it with the same PROTEAN_ENV as the server
under test (the memory provider does not share data across processes).

Usage:
    PROTEAN_ENV=production python -m loadtests.seed --items 200 --events 40 --orders-per-buyer 8
"""

import argparse
import random

from loadtests.data_generators import buyer_pool, cart_data, item_data, order_created_at, random_status


def seed(items: int, events: int, orders_per_buyer: int) -> None:
    from protean.utils.globals import current_domain

    from marketplace.catalog.item import CatalogItem
    from marketplace.domain import marketplace
    from marketplace.ordering.order import Order

    marketplace.init()
    with marketplace.domain_context():
        item_repo = current_domain.repository_for(CatalogItem)
        order_repo = current_domain.repository_for(Order)

        catalog = []
        for index in range(items + events):
            item = CatalogItem.create(**item_data(as_event=index >= items))
            item_repo.add(item)
            catalog.append(item)
        print(f"Created {items} products and {events} events.")

        buyers = buyer_pool()
        for user_id in buyers:
            for _ in range(random.randint(0, orders_per_buyer)):
                order_repo.add(
                    Order.place(
                        user_id=user_id,
                        cart=cart_data(catalog),
                        status=random_status(),
                        created_at=order_created_at(),
                    )
                )
        print(f"Placed orders for {len(buyers)} buyers.")


def main():
    parser = argparse.ArgumentParser(description="Seed data for marketplace load tests")
    parser.add_argument("--items", type=int, default=200)
    parser.add_argument("--events", type=int, default=40)
    parser.add_argument("--orders-per-buyer", type=int, default=8)
    args = parser.parse_args()

    seed(args.items, args.events, args.orders_per_buyer)


if __name__ == "__main__":
    main()
