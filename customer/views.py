"""Customer API views for checkout preferences.

Endpoints are authenticated and scoped to the current user. Views stay thin
and delegate business rules to services/selectors.
"""

from common.results import result_status
from drf_spectacular.utils import OpenApiExample, extend_schema
from rest_framework import permissions
from rest_framework.response import Response
from rest_framework.views import APIView

from .models import Profile
from .selectors import get_profile
from .serializers import PaymentMethodSerializer, ProfileSerializer, ShippingAddressSerializer
from .services import update_user_address, update_user_payment_method


class CheckoutProfileView(APIView):
    permission_classes = [permissions.IsAuthenticated]
    throttle_scope = "profile"

    @extend_schema(tags=["Customer Endpoints"], summary="Get checkout preferences", responses=ProfileSerializer)
    def get(self, request):
        profile = get_profile(request.user.id)
        if profile is None:
            profile, _ = Profile.objects.get_or_create(user=request.user)
        return Response(ProfileSerializer(profile).data)


class ShippingAddressView(APIView):
    permission_classes = [permissions.IsAuthenticated]
    throttle_scope = "profile"

    @extend_schema(
        tags=["Customer Endpoints"],
        summary="Set shipping address",
        request=ShippingAddressSerializer,
        examples=[
            OpenApiExample(
                "Address",
                value={
                    "full_name": "Jane Roe",
                    "street_address": "456 Broad Ave",
                    "city": "Springfield",
                    "postal_code": "12345",
                    "country": "USA",
                },
                request_only=True,
            )
        ],
    )
    def put(self, request):
        serializer = ShippingAddressSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        result = update_user_address(user=request.user, data=serializer.validated_data)
        return Response(result.as_dict(), status=result_status(result))


class PaymentMethodView(APIView):
    permission_classes = [permissions.IsAuthenticated]
    throttle_scope = "profile"

    @extend_schema(
        tags=["Customer Endpoints"],
        summary="Set payment method",
        request=PaymentMethodSerializer,
        examples=[OpenApiExample("PayPal", value={"type": "PayPal"}, request_only=True)],
    )
    def put(self, request):
        serializer = PaymentMethodSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        result = update_user_payment_method(user=request.user, method=serializer.validated_data["type"])
        return Response(result.as_dict(), status=result_status(result))
