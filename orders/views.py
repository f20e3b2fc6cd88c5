"""Orders API endpoints.

Customers place orders from their cart and read their own orders.
Administrators deliver, mark cash-on-delivery orders paid, delete orders and
read the sales summary.
"""

from common.identity import identity_from_request
from common.results import result_status
from django.http import Http404
from drf_spectacular.utils import OpenApiExample, OpenApiParameter, extend_schema
from rest_framework import generics, status
from rest_framework.pagination import PageNumberPagination
from rest_framework.permissions import IsAdminUser, IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from .selectors import get_order_by_id, get_order_summary, list_orders_for_user
from .serializers import OrderSerializer, OrderSummarySerializer
from .services import create_order, delete_order, deliver_order, mark_order_paid_cod


class DefaultPagination(PageNumberPagination):
    page_size = 20
    page_size_query_param = "page_size"


class OrderListCreateView(generics.ListAPIView):
    """List the caller's orders, newest first, or place an order from the cart."""

    permission_classes = [IsAuthenticated]
    serializer_class = OrderSerializer
    pagination_class = DefaultPagination
    throttle_scope = "orders"

    def get_queryset(self):
        return list_orders_for_user(self.request.user.id).prefetch_related("items")

    def get_throttles(self):
        if self.request.method == "POST":
            self.throttle_scope = "orders_write"
        return super().get_throttles()

    @extend_schema(
        tags=["Orders"],
        summary="List my orders",
        parameters=[
            OpenApiParameter(name="page", description="Page number", required=False, type=int),
            OpenApiParameter(name="page_size", description="Items per page", required=False, type=int),
        ],
    )
    def get(self, request, *args, **kwargs):
        return super().get(request, *args, **kwargs)

    @extend_schema(
        tags=["Orders"],
        summary="Place order from cart",
        description=(
            "Creates an order from the caller's cart using the shipping address and payment method on file. "
            "On failure `redirectTo` names the page where the customer can fix the problem."
        ),
        request=None,
        examples=[
            OpenApiExample(
                "Created",
                value={
                    "success": True,
                    "message": "Order created successfully.",
                    "redirectTo": "/order/42",
                    "data": {"order_id": 42},
                },
                response_only=True,
            ),
            OpenApiExample(
                "Empty cart",
                value={"success": False, "message": "Your cart is empty.", "redirectTo": "/cart"},
                response_only=True,
            ),
        ],
    )
    def post(self, request):
        result = create_order(identity_from_request(request))
        return Response(result.as_dict(), status=result_status(result, success_status=status.HTTP_201_CREATED))


class OrderDetailView(APIView):
    """Retrieve an order (owner or admin) or delete it (admin)."""

    throttle_scope = "orders"

    def get_permissions(self):
        if self.request.method == "DELETE":
            return [IsAdminUser()]
        return [IsAuthenticated()]

    def get_throttles(self):
        if self.request.method == "DELETE":
            self.throttle_scope = "orders_write"
        return super().get_throttles()

    @extend_schema(tags=["Orders"], summary="Get order detail", responses=OrderSerializer)
    def get(self, request, order_id: int):
        order = get_order_by_id(order_id)
        if order is None or (order.user_id != request.user.id and not request.user.is_staff):
            raise Http404("Not found.")
        return Response(OrderSerializer(order).data)

    @extend_schema(tags=["Orders"], summary="Delete order")
    def delete(self, request, order_id: int):
        result = delete_order(order_id)
        return Response(result.as_dict(), status=result_status(result))


class OrderDeliverView(APIView):
    permission_classes = [IsAdminUser]
    throttle_scope = "orders_write"

    @extend_schema(tags=["Orders"], summary="Mark order delivered", request=None)
    def post(self, request, order_id: int):
        result = deliver_order(order_id)
        return Response(result.as_dict(), status=result_status(result))


class OrderMarkPaidView(APIView):
    """Cash-on-delivery override: settle the order without a gateway capture."""

    permission_classes = [IsAdminUser]
    throttle_scope = "orders_write"

    @extend_schema(tags=["Orders"], summary="Mark cash-on-delivery order paid", request=None)
    def post(self, request, order_id: int):
        result = mark_order_paid_cod(order_id)
        return Response(result.as_dict(), status=result_status(result))


class OrderSummaryView(APIView):
    permission_classes = [IsAdminUser]
    throttle_scope = "orders"

    @extend_schema(tags=["Orders"], summary="Sales summary", responses=OrderSummarySerializer)
    def get(self, request):
        return Response(OrderSummarySerializer(get_order_summary()).data)
