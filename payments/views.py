"""Payment endpoints for the PayPal button flow.

The client first asks for a gateway intent for an order, then posts the
approved gateway order id back for capture and settlement.
"""

from common.results import result_status
from django.http import Http404
from drf_spectacular.utils import OpenApiExample, extend_schema
from orders.selectors import get_order_by_id
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from .serializers import ApprovePaymentSerializer
from .services import approve_payment, create_payment_order


def _ensure_owner(request, order_id: int) -> None:
    order = get_order_by_id(order_id)
    if order is None or (order.user_id != request.user.id and not request.user.is_staff):
        raise Http404("Not found.")


class PayPalCreateView(APIView):
    permission_classes = [IsAuthenticated]
    throttle_scope = "payments_write"

    @extend_schema(
        tags=["Payments"],
        summary="Create PayPal payment for an order",
        request=None,
        examples=[
            OpenApiExample(
                "Created",
                value={"success": True, "message": "Payment order created successfully.", "data": "5O190127TN364715T"},
                response_only=True,
            )
        ],
    )
    def post(self, request, order_id: int):
        _ensure_owner(request, order_id)
        result = create_payment_order(order_id)
        return Response(result.as_dict(), status=result_status(result))


class PayPalApproveView(APIView):
    permission_classes = [IsAuthenticated]
    throttle_scope = "payments_write"

    @extend_schema(
        tags=["Payments"],
        summary="Capture approved PayPal payment",
        request=ApprovePaymentSerializer,
        examples=[OpenApiExample("Approve", value={"orderID": "5O190127TN364715T"}, request_only=True)],
    )
    def post(self, request, order_id: int):
        _ensure_owner(request, order_id)
        serializer = ApprovePaymentSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        result = approve_payment(order_id, serializer.validated_data["orderID"])
        return Response(result.as_dict(), status=result_status(result))
