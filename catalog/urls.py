"""URL routes for the catalog app."""

from django.urls import path

from .views import MyReviewView, ProductDetailView, ReviewListCreateView

urlpatterns = [
    path("products/<int:product_id>/reviews/", ReviewListCreateView.as_view(), name="product-reviews"),
    path("products/<int:product_id>/reviews/mine/", MyReviewView.as_view(), name="product-my-review"),
    path("products/<slug:slug>/", ProductDetailView.as_view(), name="product-detail"),
]
