"""Read-side helpers for orders and admin sales reporting."""

from decimal import Decimal
from typing import Optional

from catalog.models import Product
from django.contrib.auth import get_user_model
from django.db.models import QuerySet, Sum
from django.db.models.functions import TruncMonth

from .models import Order

LATEST_SALES_LIMIT = 6


def get_order_by_id(order_id: int) -> Optional[Order]:
    """Return an order with its items and user preloaded, or None."""

    return Order.objects.select_related("user").prefetch_related("items").filter(pk=order_id).first()


def list_orders_for_user(user_id: int) -> QuerySet[Order]:
    return Order.objects.filter(user_id=user_id).order_by("-created_at", "-id")


def get_order_summary() -> dict:
    """Counts, total sales, monthly sales (`MM/YY`) and the latest orders."""

    total_sales = Order.objects.aggregate(total=Sum("total_price"))["total"] or Decimal("0.00")
    monthly = (
        Order.objects.annotate(month=TruncMonth("created_at"))
        .values("month")
        .annotate(total=Sum("total_price"))
        .order_by("month")
    )
    latest = Order.objects.select_related("user").order_by("-created_at", "-id")[:LATEST_SALES_LIMIT]
    return {
        "orders_count": Order.objects.count(),
        "products_count": Product.objects.count(),
        "users_count": get_user_model().objects.count(),
        "total_sales": total_sales,
        "sales_data": [
            {"month": row["month"].strftime("%m/%y"), "total_sales": row["total"] or Decimal("0.00")}
            for row in monthly
        ],
        "latest_sales": list(latest),
    }
