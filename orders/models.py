"""Order models.

An order is an immutable snapshot of a cart at checkout: shipping address,
payment method, line items and the four money fields are copied in and never
recomputed. Payment and delivery move forward only: unpaid, paid, delivered.
"""

from decimal import Decimal
from typing import Optional

from common.choices import PaymentMethod, PaymentStatus
from common.values import PaymentResult, ShippingAddress
from django.conf import settings
from django.db import models


class TimeStampedModel(models.Model):
    """Abstract base model adding created/updated timestamps."""

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        abstract = True


class Order(TimeStampedModel):
    """Purchase order placed from a user's cart."""

    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        related_name="orders",
        null=True,
        blank=True,
        on_delete=models.SET_NULL,
    )

    shipping_full_name = models.CharField(max_length=120)
    shipping_street_address = models.CharField(max_length=200)
    shipping_city = models.CharField(max_length=80)
    shipping_postal_code = models.CharField(max_length=20)
    shipping_country = models.CharField(max_length=80)
    shipping_lat = models.FloatField(null=True, blank=True)
    shipping_lng = models.FloatField(null=True, blank=True)

    payment_method = models.CharField(max_length=32, choices=PaymentMethod.choices)

    items_price = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal("0.00"))
    shipping_price = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal("0.00"))
    tax_price = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal("0.00"))
    total_price = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal("0.00"))

    is_paid = models.BooleanField(default=False, db_index=True)
    paid_at = models.DateTimeField(null=True, blank=True)
    is_delivered = models.BooleanField(default=False, db_index=True)
    delivered_at = models.DateTimeField(null=True, blank=True)

    # Gateway payment result; the intent id is stored before capture
    payment_intent_id = models.CharField(max_length=64, blank=True, db_index=True)
    payment_status = models.CharField(max_length=32, blank=True, choices=PaymentStatus.choices)
    payer_email = models.EmailField(blank=True)
    amount_paid = models.DecimalField(max_digits=12, decimal_places=2, null=True, blank=True)

    class Meta:
        ordering = ["-created_at", "-id"]
        indexes = [
            models.Index(fields=["user", "created_at"], name="orders_order_user_created_idx"),
        ]
        constraints = [
            models.CheckConstraint(
                name="order_paid_at_iff_paid",
                condition=models.Q(is_paid=True, paid_at__isnull=False)
                | models.Q(is_paid=False, paid_at__isnull=True),
            ),
            models.CheckConstraint(
                name="order_delivered_at_iff_delivered",
                condition=models.Q(is_delivered=True, delivered_at__isnull=False)
                | models.Q(is_delivered=False, delivered_at__isnull=True),
            ),
            models.CheckConstraint(
                name="order_delivered_requires_paid",
                condition=models.Q(is_delivered=False) | models.Q(is_paid=True),
            ),
            models.CheckConstraint(name="order_total_non_negative", condition=models.Q(total_price__gte=0)),
        ]

    def __str__(self) -> str:  # pragma: no cover
        return f"Order#{self.id} user={self.user_id} paid={self.is_paid} delivered={self.is_delivered}"

    @property
    def shipping_address(self) -> ShippingAddress:
        return ShippingAddress(
            full_name=self.shipping_full_name,
            street_address=self.shipping_street_address,
            city=self.shipping_city,
            postal_code=self.shipping_postal_code,
            country=self.shipping_country,
            lat=self.shipping_lat,
            lng=self.shipping_lng,
        )

    def set_shipping_address(self, address: ShippingAddress) -> None:
        self.shipping_full_name = address.full_name
        self.shipping_street_address = address.street_address
        self.shipping_city = address.city
        self.shipping_postal_code = address.postal_code
        self.shipping_country = address.country
        self.shipping_lat = address.lat
        self.shipping_lng = address.lng

    @property
    def payment_result(self) -> Optional[PaymentResult]:
        if not self.payment_intent_id:
            return None
        return PaymentResult(
            id=self.payment_intent_id,
            status=self.payment_status,
            email_address=self.payer_email,
            price_paid=self.amount_paid if self.amount_paid is not None else Decimal("0.00"),
        )


class OrderItem(TimeStampedModel):
    """Line item within an order.

    Snapshots the product's name, slug, image and unit price at checkout.
    """

    order = models.ForeignKey(Order, related_name="items", on_delete=models.CASCADE)
    product = models.ForeignKey("catalog.Product", related_name="order_items", on_delete=models.PROTECT)
    name = models.CharField(max_length=200)
    slug = models.SlugField(max_length=220)
    image = models.CharField(max_length=500, blank=True)
    unit_price = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal("0.00"))
    quantity = models.PositiveIntegerField(default=1)

    class Meta:
        ordering = ["id"]
        constraints = [
            models.UniqueConstraint(fields=["order", "product"], name="unique_product_per_order"),
            models.CheckConstraint(name="orderitem_price_non_negative", condition=models.Q(unit_price__gte=0)),
        ]

    def __str__(self) -> str:  # pragma: no cover
        return f"OrderItem#{self.id} order={self.order_id} product={self.product_id} qty={self.quantity}"

    @property
    def line_total(self) -> Decimal:
        return (self.unit_price or Decimal("0.00")) * Decimal(int(self.quantity))
