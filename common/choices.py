"""Shared enumerations and choices used across apps."""

from django.db import models


class PaymentMethod(models.TextChoices):
    """Payment methods a customer can keep on file."""

    PAYPAL = "PayPal", "PayPal"
    STRIPE = "Stripe", "Stripe"
    CASH_ON_DELIVERY = "CashOnDelivery", "Cash on delivery"


class UserRole(models.TextChoices):
    USER = "user", "User"
    ADMIN = "admin", "Admin"


class PaymentStatus(models.TextChoices):
    """Capture statuses reported by the payment gateway."""

    PENDING = "", "Pending"
    COMPLETED = "COMPLETED", "Completed"
