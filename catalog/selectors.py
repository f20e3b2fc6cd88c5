"""Selectors for the catalog domain.

Read-only query helpers plus the product detail cache. Cart and review
services invalidate the cached entry when a product's data changes.
"""

from typing import Optional

from django.conf import settings
from django.core.cache import cache
from django.db.models import QuerySet

from .models import Product, Review
from .serializers import ProductDetailSerializer

PRODUCT_CACHE_PREFIX = "catalog:product:"


def product_cache_key(slug: str) -> str:
    return f"{PRODUCT_CACHE_PREFIX}{slug}"


def get_product(product_id: int) -> Optional[Product]:
    return Product.objects.filter(pk=product_id).first()


def get_product_by_slug(slug: str) -> Optional[Product]:
    """Return a single product by slug, or None if not found."""

    try:
        return Product.objects.get(slug=slug)
    except Product.DoesNotExist:
        return None


def get_product_detail(slug: str) -> Optional[dict]:
    """Serialized product detail, served from the cache when present.

    Missing products are not cached.
    """

    key = product_cache_key(slug)
    data = cache.get(key)
    if data is not None:
        return data
    product = get_product_by_slug(slug)
    if product is None:
        return None
    data = dict(ProductDetailSerializer(product).data)
    cache.set(key, data, timeout=getattr(settings, "PRODUCT_CACHE_TTL_SECONDS", 300))
    return data


def invalidate_product_cache(slug: str) -> None:
    cache.delete(product_cache_key(slug))


def list_reviews(product_id: int) -> QuerySet[Review]:
    """Reviews for a product, newest first, with the author preloaded."""

    return Review.objects.filter(product_id=product_id).select_related("user").order_by("-created_at", "-id")


def get_user_review(user, product_id: int) -> Optional[Review]:
    return Review.objects.filter(product_id=product_id, user=user).first()
