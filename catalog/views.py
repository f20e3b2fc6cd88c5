"""Catalog API views: cached product detail and product reviews."""

from common.results import result_status
from drf_spectacular.utils import OpenApiExample, OpenApiResponse, extend_schema
from rest_framework import permissions, status
from rest_framework.response import Response
from rest_framework.views import APIView

from . import selectors
from .serializers import ProductDetailSerializer, ReviewSerializer, ReviewWriteSerializer
from .services import create_update_review


class ProductDetailView(APIView):
    permission_classes = [permissions.AllowAny]
    throttle_scope = "catalog"

    @extend_schema(
        tags=["Catalog Endpoints"],
        summary="Get product by slug",
        responses={200: ProductDetailSerializer, 404: OpenApiResponse(description="Not found")},
    )
    def get(self, request, slug: str):
        data = selectors.get_product_detail(slug)
        if data is None:
            return Response({"detail": "Not found."}, status=status.HTTP_404_NOT_FOUND)
        return Response(data)


class ReviewListCreateView(APIView):
    throttle_scope = "catalog"

    def get_permissions(self):
        if self.request.method == "POST":
            return [permissions.IsAuthenticated()]
        return [permissions.AllowAny()]

    def get_throttles(self):
        if self.request.method == "POST":
            self.throttle_scope = "reviews_write"
        return super().get_throttles()

    @extend_schema(tags=["Catalog Endpoints"], summary="List product reviews", responses=ReviewSerializer(many=True))
    def get(self, request, product_id: int):
        reviews = selectors.list_reviews(product_id)
        return Response({"data": ReviewSerializer(reviews, many=True).data})

    @extend_schema(
        tags=["Catalog Endpoints"],
        summary="Create or update my review",
        request=ReviewWriteSerializer,
        examples=[
            OpenApiExample(
                "Review",
                value={"title": "Great fit", "description": "Comfortable and warm", "rating": 5},
                request_only=True,
            )
        ],
    )
    def post(self, request, product_id: int):
        serializer = ReviewWriteSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        result = create_update_review(user=request.user, product_id=product_id, **serializer.validated_data)
        return Response(result.as_dict(), status=result_status(result))


class MyReviewView(APIView):
    permission_classes = [permissions.IsAuthenticated]
    throttle_scope = "catalog"

    @extend_schema(tags=["Catalog Endpoints"], summary="Get my review for a product")
    def get(self, request, product_id: int):
        review = selectors.get_user_review(request.user, product_id)
        if review is None:
            return Response({"detail": "Not found."}, status=status.HTTP_404_NOT_FOUND)
        return Response(ReviewSerializer(review).data)
