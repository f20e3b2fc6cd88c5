"""Serializers for catalog API endpoints."""

from rest_framework import serializers

from .models import Product, Review


class ProductDetailSerializer(serializers.ModelSerializer):
    image = serializers.CharField(read_only=True)

    class Meta:
        model = Product
        fields = [
            "id",
            "name",
            "slug",
            "category",
            "brand",
            "description",
            "images",
            "image",
            "is_featured",
            "banner",
            "price",
            "stock",
            "rating",
            "num_reviews",
        ]


class ReviewSerializer(serializers.ModelSerializer):
    user_name = serializers.CharField(source="user.name", read_only=True)

    class Meta:
        model = Review
        fields = [
            "id",
            "user_id",
            "user_name",
            "product_id",
            "title",
            "description",
            "rating",
            "is_verified_purchase",
            "created_at",
        ]
        read_only_fields = fields


class ReviewWriteSerializer(serializers.Serializer):
    title = serializers.CharField(min_length=3, max_length=200)
    description = serializers.CharField(min_length=3)
    rating = serializers.IntegerField(min_value=1, max_value=5)
