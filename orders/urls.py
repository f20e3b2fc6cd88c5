"""URL routes for the orders app (v1)."""

from django.urls import path

from .views import OrderDeliverView, OrderDetailView, OrderListCreateView, OrderMarkPaidView, OrderSummaryView

app_name = "orders"

urlpatterns = [
    path("", OrderListCreateView.as_view(), name="order-list"),
    path("summary/", OrderSummaryView.as_view(), name="order-summary"),
    path("<int:order_id>/", OrderDetailView.as_view(), name="order-detail"),
    path("<int:order_id>/deliver/", OrderDeliverView.as_view(), name="order-deliver"),
    path("<int:order_id>/mark-paid/", OrderMarkPaidView.as_view(), name="order-mark-paid"),
]
