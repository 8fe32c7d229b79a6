"""Plain-data renderings of catalog items returned by the query engines."""


def image_urls(item) -> list[str]:
    return [image.url for image in item.images]


def item_card(item) -> dict:
    return {
        "id": str(item.id),
        "shop_id": str(item.shop_id),
        "name": item.name,
        "description": item.description,
        "category": item.category,
        "item_type": item.item_type,
        "original_price": item.original_price,
        "discount_price": item.discount_price,
        "stock": item.stock,
        "sold_out": item.sold_out,
        "status": item.status,
        "start_date": item.start_date,
        "finish_date": item.finish_date,
        "ratings": item.ratings,
        "review_count": len(item.reviews),
        "images": [{"url": image.url, "key": image.key} for image in item.images],
        "created_at": item.created_at,
    }


def product_summary(item, detailed: bool = False) -> dict:
    """The product fields joined into an order's cart line at read time."""
    summary = {
        "id": str(item.id),
        "name": item.name,
        "images": image_urls(item),
        "price": item.effective_price,
    }
    if detailed:
        summary["description"] = item.description
    return summary
