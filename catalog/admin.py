from django.contrib import admin

from .models import Product, Review


@admin.register(Product)
class ProductAdmin(admin.ModelAdmin):
    list_display = ("id", "name", "slug", "category", "brand", "price", "stock", "rating", "num_reviews")
    list_filter = ("category", "brand", "is_featured")
    search_fields = ("name", "slug", "brand")
    prepopulated_fields = {"slug": ("name",)}
    readonly_fields = ("rating", "num_reviews")


@admin.register(Review)
class ReviewAdmin(admin.ModelAdmin):
    list_display = ("id", "product", "user", "rating", "created_at")
    list_filter = ("rating",)
    raw_id_fields = ("user", "product")
