"""Cart app models.

A cart belongs to an anonymous session token and, once the shopper signs in,
to a user. The four money fields are derived from the line items by
`cart.pricing.calc_price` on every mutation and are never written otherwise.
"""

from decimal import Decimal

from common.values import CartLine
from django.conf import settings
from django.db import models


class TimeStampedModel(models.Model):
    """Abstract base model adding created/updated timestamps."""

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        abstract = True


class Cart(TimeStampedModel):
    """Shopping cart keyed by session token and optionally by user."""

    session_cart_id = models.CharField(max_length=64, db_index=True)
    user = models.OneToOneField(
        settings.AUTH_USER_MODEL,
        null=True,
        blank=True,
        related_name="cart",
        on_delete=models.CASCADE,
    )
    items_price = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal("0.00"))
    shipping_price = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal("0.00"))
    tax_price = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal("0.00"))
    total_price = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal("0.00"))

    class Meta:
        ordering = ["-updated_at"]

    def __str__(self) -> str:  # pragma: no cover
        return f"Cart#{self.id} ({self.user_id or self.session_cart_id})"

    def lines(self) -> list[CartLine]:
        return [CartLine(unit_price=i.unit_price, quantity=i.quantity) for i in self.items.all()]


class CartItem(TimeStampedModel):
    """Line item in a shopping cart.

    Display fields are copied from the product when the line is created.
    """

    cart = models.ForeignKey(Cart, related_name="items", on_delete=models.CASCADE)
    product = models.ForeignKey("catalog.Product", related_name="cart_items", on_delete=models.CASCADE)
    name = models.CharField(max_length=200)
    slug = models.SlugField(max_length=220)
    image = models.CharField(max_length=500, blank=True)
    unit_price = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal("0.00"))
    quantity = models.PositiveIntegerField(default=1)

    class Meta:
        ordering = ["id"]
        constraints = [
            models.UniqueConstraint(fields=["cart", "product"], name="unique_product_per_cart"),
        ]

    def __str__(self) -> str:  # pragma: no cover
        return f"CartItem#{self.id} cart={self.cart_id} product={self.product_id} qty={self.quantity}"

    @property
    def line_total(self) -> Decimal:
        return (self.unit_price or Decimal("0.00")) * Decimal(int(self.quantity))
