"""DRF views for cart operations.

Signed-in and anonymous shoppers share these endpoints. Anonymous carts are
addressed by the `X-Session-Cart-Id` header or the `sessionCartId` cookie;
the first add issues a token when the caller has none.
"""

from dataclasses import replace

from common.exceptions import NotFound
from common.identity import SESSION_CART_COOKIE, identity_from_request
from common.results import ActionResult, result_status
from drf_spectacular.utils import OpenApiExample, extend_schema
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework.views import APIView

from .selectors import get_cart_with_items
from .serializers import AddItemSerializer, CartReadSerializer
from .services import add_item, new_session_cart_id, remove_item


def _with_session_cookie(response: Response, session_cart_id: str | None) -> Response:
    if session_cart_id:
        response.set_cookie(SESSION_CART_COOKIE, session_cart_id, httponly=True, samesite="Lax")
    return response


class CartDetailView(APIView):
    """Return the caller's cart, or an empty cart when none exists yet."""

    permission_classes = [AllowAny]
    throttle_scope = "cart"

    @extend_schema(
        tags=["Cart Endpoints"],
        summary="Get cart",
        description="Returns the caller's cart including items and prices.",
        responses=CartReadSerializer,
        examples=[
            OpenApiExample(
                "Cart",
                value={
                    "id": 1,
                    "session_cart_id": "b3c1d2e4f5a6",
                    "items": [
                        {
                            "product_id": 10,
                            "name": "Polo Shirt",
                            "slug": "polo-shirt",
                            "image": "/images/p1.jpg",
                            "unit_price": "20.00",
                            "quantity": 1,
                            "line_total": "20.00",
                        }
                    ],
                    "items_price": "20.00",
                    "shipping_price": "2.00",
                    "tax_price": "3.00",
                    "total_price": "25.00",
                },
                response_only=True,
            )
        ],
    )
    def get(self, request):
        identity = identity_from_request(request)
        try:
            cart = get_cart_with_items(identity)
        except NotFound:
            cart = None
        if cart is None:
            return Response(
                {
                    "id": None,
                    "session_cart_id": identity.session_cart_id,
                    "items": [],
                    "items_price": "0.00",
                    "shipping_price": "0.00",
                    "tax_price": "0.00",
                    "total_price": "0.00",
                }
            )
        return Response(CartReadSerializer(cart).data)


class CartAddItemView(APIView):
    permission_classes = [AllowAny]
    throttle_scope = "cart_write"

    @extend_schema(
        tags=["Cart Endpoints"],
        summary="Add one unit of a product",
        request=AddItemSerializer,
        examples=[OpenApiExample("Add", value={"product_id": 10}, request_only=True)],
    )
    def post(self, request):
        serializer = AddItemSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        identity = identity_from_request(request)
        if identity.is_empty:
            identity = replace(identity, session_cart_id=new_session_cart_id())
        result: ActionResult = add_item(identity, serializer.validated_data["product_id"])
        response = Response(result.as_dict(), status=result_status(result))
        if result.success and not identity.is_authenticated:
            _with_session_cookie(response, result.data["session_cart_id"])
        return response


class CartRemoveItemView(APIView):
    permission_classes = [AllowAny]
    throttle_scope = "cart_write"

    @extend_schema(tags=["Cart Endpoints"], summary="Remove one unit of a product", request=None)
    def post(self, request, product_id: int):
        identity = identity_from_request(request)
        result = remove_item(identity, product_id)
        return Response(result.as_dict(), status=result_status(result))

