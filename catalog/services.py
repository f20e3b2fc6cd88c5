"""Catalog domain services.

Reviews are upserted per (user, product); the product's rating aggregates are
recomputed in the same transaction so they never drift from the review rows.
"""

import logging
from decimal import ROUND_HALF_UP, Decimal

from common.exceptions import NotFound, ValidationFailed
from common.results import ActionResult, as_action_result
from django.db import transaction
from django.db.models import Avg, Count
from orders.models import OrderItem

from .models import Product, Review
from .selectors import invalidate_product_cache

logger = logging.getLogger("storefront.catalog")


def _validate_review(title: str, description: str, rating) -> tuple[str, str, int]:
    errors: dict = {}
    title = (title or "").strip()
    description = (description or "").strip()
    if len(title) < 3:
        errors["title"] = ["Must be at least 3 characters."]
    if len(description) < 3:
        errors["description"] = ["Must be at least 3 characters."]
    try:
        rating = int(rating)
    except (TypeError, ValueError):
        rating = 0
    if not 1 <= rating <= 5:
        errors["rating"] = ["Must be between 1 and 5."]
    if errors:
        raise ValidationFailed("Invalid review.", errors=errors)
    return title, description, rating


@as_action_result
def create_update_review(*, user, product_id: int, title: str, description: str, rating) -> ActionResult:
    """Create the user's review for a product, or update the existing one."""

    title, description, rating = _validate_review(title, description, rating)

    with transaction.atomic():
        # Lock the product so concurrent reviews recompute aggregates serially
        product = Product.objects.select_for_update().filter(pk=product_id).first()
        if product is None:
            raise NotFound("Product not found.")
        verified = OrderItem.objects.filter(order__user=user, order__is_paid=True, product=product).exists()
        review, created = Review.objects.update_or_create(
            user=user,
            product=product,
            defaults={
                "title": title,
                "description": description,
                "rating": rating,
                "is_verified_purchase": verified,
            },
        )
        agg = Review.objects.filter(product=product).aggregate(avg=Avg("rating"), count=Count("id"))
        product.rating = Decimal(str(agg["avg"] or 0)).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)
        product.num_reviews = agg["count"]
        product.save(update_fields=["rating", "num_reviews", "updated_at"])

    invalidate_product_cache(product.slug)
    logger.info(
        "review.saved",
        extra={
            "event": "review.saved",
            "product_id": product.id,
            "user_id": user.id,
            "created": created,
            "rating": rating,
        },
    )
    return ActionResult.ok("Review updated successfully.", data={"review_id": review.id})
