from decimal import Decimal

import pytest
from cart.tests.factories import UserFactory
from catalog.models import Review
from catalog.selectors import get_product_detail, get_user_review, list_reviews, product_cache_key
from catalog.services import create_update_review
from catalog.tests.factories import ProductFactory, ReviewFactory
from django.core.cache import cache
from django.utils import timezone
from orders.tests.factories import OrderFactory, OrderItemFactory
from rest_framework.test import APIClient


@pytest.mark.django_db
def test_create_review_updates_product_aggregates():
    product = ProductFactory()
    ReviewFactory(product=product, rating=5)
    user = UserFactory()

    result = create_update_review(user=user, product_id=product.id, title="Nice one", description="Fits well", rating=2)

    assert result.success is True
    product.refresh_from_db()
    assert product.num_reviews == 2
    assert product.rating == Decimal("3.50")


@pytest.mark.django_db
def test_second_review_by_same_user_updates_in_place():
    product = ProductFactory()
    user = UserFactory()
    create_update_review(user=user, product_id=product.id, title="First", description="Meh okay", rating=2)

    create_update_review(user=user, product_id=product.id, title="Second", description="Grew on me", rating=4)

    review = Review.objects.get(user=user, product=product)
    assert review.title == "Second"
    product.refresh_from_db()
    assert product.num_reviews == 1
    assert product.rating == Decimal("4.00")


@pytest.mark.django_db
def test_review_marked_verified_only_after_paid_order():
    product = ProductFactory()
    buyer = UserFactory()
    OrderItemFactory(order=OrderFactory(user=buyer, is_paid=True, paid_at=timezone.now()), product=product)
    browser = UserFactory()
    OrderItemFactory(order=OrderFactory(user=browser), product=product)

    create_update_review(user=buyer, product_id=product.id, title="Bought it", description="Works", rating=5)
    create_update_review(user=browser, product_id=product.id, title="Looked", description="Unpaid", rating=3)

    assert Review.objects.get(user=buyer).is_verified_purchase is True
    assert Review.objects.get(user=browser).is_verified_purchase is False


@pytest.mark.django_db
def test_review_for_missing_product_fails():
    result = create_update_review(user=UserFactory(), product_id=123456, title="Title", description="Text", rating=3)
    assert result.success is False
    assert result.error == "not_found"


@pytest.mark.django_db
@pytest.mark.parametrize("rating", [0, 6, "x"])
def test_review_rating_out_of_range_fails(rating):
    product = ProductFactory()
    result = create_update_review(
        user=UserFactory(), product_id=product.id, title="Title", description="Text", rating=rating
    )
    assert result.error == "validation_failed"
    assert not Review.objects.exists()


@pytest.mark.django_db
def test_review_invalidates_product_cache():
    product = ProductFactory()
    assert get_product_detail(product.slug)["num_reviews"] == 0

    create_update_review(user=UserFactory(), product_id=product.id, title="Title", description="Text", rating=5)

    assert cache.get(product_cache_key(product.slug)) is None
    assert get_product_detail(product.slug)["num_reviews"] == 1


@pytest.mark.django_db
def test_review_selectors():
    product = ProductFactory()
    older = ReviewFactory(product=product)
    newer = ReviewFactory(product=product)
    ReviewFactory()

    assert list(list_reviews(product.id)) == [newer, older]
    assert get_user_review(older.user, product.id) == older
    assert get_user_review(UserFactory(), product.id) is None


@pytest.mark.django_db
def test_review_endpoints():
    product = ProductFactory()
    user = UserFactory()
    client = APIClient()

    assert client.post(f"/api/v1/catalog/products/{product.id}/reviews/", {}, format="json").status_code == 401

    client.force_authenticate(user=user)
    resp = client.post(
        f"/api/v1/catalog/products/{product.id}/reviews/",
        {"title": "Great fit", "description": "Comfortable and warm", "rating": 5},
        format="json",
    )
    assert resp.status_code == 200
    assert resp.json()["success"] is True

    listing = APIClient().get(f"/api/v1/catalog/products/{product.id}/reviews/")
    assert listing.status_code == 200
    assert listing.json()["data"][0]["user_name"] == user.name

    mine = client.get(f"/api/v1/catalog/products/{product.id}/reviews/mine/")
    assert mine.status_code == 200
    assert mine.json()["rating"] == 5


@pytest.mark.django_db
def test_review_save_emits_structured_event(caplog):
    product = ProductFactory()
    user = UserFactory()

    with caplog.at_level("INFO", logger="storefront.catalog"):
        create_update_review(user=user, product_id=product.id, title="Great", description="Loved it", rating=5)

    record = next(r for r in caplog.records if r.getMessage() == "review.saved")
    assert record.event == "review.saved"
    assert record.product_id == product.id
    assert record.created is True
