import django.db.models.deletion
from decimal import Decimal

from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("catalog", "0001_initial"),
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="Order",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("shipping_full_name", models.CharField(max_length=120)),
                ("shipping_street_address", models.CharField(max_length=200)),
                ("shipping_city", models.CharField(max_length=80)),
                ("shipping_postal_code", models.CharField(max_length=20)),
                ("shipping_country", models.CharField(max_length=80)),
                ("shipping_lat", models.FloatField(blank=True, null=True)),
                ("shipping_lng", models.FloatField(blank=True, null=True)),
                (
                    "payment_method",
                    models.CharField(
                        choices=[
                            ("PayPal", "PayPal"),
                            ("Stripe", "Stripe"),
                            ("CashOnDelivery", "Cash on delivery"),
                        ],
                        max_length=32,
                    ),
                ),
                ("items_price", models.DecimalField(decimal_places=2, default=Decimal("0.00"), max_digits=12)),
                ("shipping_price", models.DecimalField(decimal_places=2, default=Decimal("0.00"), max_digits=12)),
                ("tax_price", models.DecimalField(decimal_places=2, default=Decimal("0.00"), max_digits=12)),
                ("total_price", models.DecimalField(decimal_places=2, default=Decimal("0.00"), max_digits=12)),
                ("is_paid", models.BooleanField(db_index=True, default=False)),
                ("paid_at", models.DateTimeField(blank=True, null=True)),
                ("is_delivered", models.BooleanField(db_index=True, default=False)),
                ("delivered_at", models.DateTimeField(blank=True, null=True)),
                ("payment_intent_id", models.CharField(blank=True, db_index=True, max_length=64)),
                (
                    "payment_status",
                    models.CharField(
                        blank=True, choices=[("", "Pending"), ("COMPLETED", "Completed")], max_length=32
                    ),
                ),
                ("payer_email", models.EmailField(blank=True, max_length=254)),
                ("amount_paid", models.DecimalField(blank=True, decimal_places=2, max_digits=12, null=True)),
                (
                    "user",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="orders",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
            ],
            options={
                "ordering": ["-created_at", "-id"],
                "indexes": [models.Index(fields=["user", "created_at"], name="orders_order_user_created_idx")],
                "constraints": [
                    models.CheckConstraint(
                        condition=models.Q(("is_paid", True), ("paid_at__isnull", False))
                        | models.Q(("is_paid", False), ("paid_at__isnull", True)),
                        name="order_paid_at_iff_paid",
                    ),
                    models.CheckConstraint(
                        condition=models.Q(("is_delivered", True), ("delivered_at__isnull", False))
                        | models.Q(("is_delivered", False), ("delivered_at__isnull", True)),
                        name="order_delivered_at_iff_delivered",
                    ),
                    models.CheckConstraint(
                        condition=models.Q(("is_delivered", False)) | models.Q(("is_paid", True)),
                        name="order_delivered_requires_paid",
                    ),
                    models.CheckConstraint(
                        condition=models.Q(("total_price__gte", 0)), name="order_total_non_negative"
                    ),
                ],
            },
        ),
        migrations.CreateModel(
            name="OrderItem",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("name", models.CharField(max_length=200)),
                ("slug", models.SlugField(max_length=220)),
                ("image", models.CharField(blank=True, max_length=500)),
                ("unit_price", models.DecimalField(decimal_places=2, default=Decimal("0.00"), max_digits=12)),
                ("quantity", models.PositiveIntegerField(default=1)),
                (
                    "order",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE, related_name="items", to="orders.order"
                    ),
                ),
                (
                    "product",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT, related_name="order_items", to="catalog.product"
                    ),
                ),
            ],
            options={
                "ordering": ["id"],
                "constraints": [
                    models.UniqueConstraint(fields=("order", "product"), name="unique_product_per_order"),
                    models.CheckConstraint(
                        condition=models.Q(("unit_price__gte", 0)), name="orderitem_price_non_negative"
                    ),
                ],
            },
        ),
    ]
