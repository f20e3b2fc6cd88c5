"""Catalog app models.

Products are referenced, not owned, by the cart and order apps: they read
price, stock and display fields, and only payment settlement writes stock.
"""

from django.conf import settings
from django.core.validators import MaxValueValidator, MinValueValidator
from django.db import models


class TimeStampedModel(models.Model):
    """Abstract base model adding created/updated timestamps."""

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        abstract = True


class Product(TimeStampedModel):
    """Sellable product.

    `images` is a list of URLs; the first one is the primary image.
    `rating` and `num_reviews` are aggregates maintained by review services.
    """

    name = models.CharField(max_length=200)
    slug = models.SlugField(max_length=220, unique=True)
    category = models.CharField(max_length=120, db_index=True)
    brand = models.CharField(max_length=120)
    description = models.TextField(blank=True)
    images = models.JSONField(default=list)
    is_featured = models.BooleanField(default=False, db_index=True)
    banner = models.URLField(max_length=500, null=True, blank=True)
    price = models.DecimalField(max_digits=12, decimal_places=2, default=0, validators=[MinValueValidator(0)])
    stock = models.IntegerField(default=0)
    rating = models.DecimalField(max_digits=3, decimal_places=2, default=0)
    num_reviews = models.IntegerField(default=0)

    class Meta:
        ordering = ["-created_at", "id"]
        constraints = [
            models.CheckConstraint(condition=models.Q(stock__gte=0), name="product_stock_non_negative"),
            models.CheckConstraint(condition=models.Q(price__gte=0), name="product_price_non_negative"),
        ]

    def __str__(self) -> str:  # pragma: no cover
        return self.name

    @property
    def image(self) -> str:
        return self.images[0] if self.images else ""


class Review(TimeStampedModel):
    """A user's review of a product; at most one per user and product."""

    user = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="reviews")
    product = models.ForeignKey(Product, on_delete=models.CASCADE, related_name="reviews")
    title = models.CharField(max_length=200)
    description = models.TextField()
    rating = models.PositiveSmallIntegerField(validators=[MinValueValidator(1), MaxValueValidator(5)])
    is_verified_purchase = models.BooleanField(default=False)

    class Meta:
        ordering = ["-created_at", "-id"]
        constraints = [
            models.UniqueConstraint(fields=["user", "product"], name="uniq_review_user_product"),
            models.CheckConstraint(condition=models.Q(rating__gte=1, rating__lte=5), name="review_rating_range"),
        ]

    def __str__(self) -> str:  # pragma: no cover
        return f"Review<{self.product_id}:{self.user_id}> {self.rating}"
