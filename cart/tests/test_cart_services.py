from decimal import Decimal
from unittest import mock

import pytest
from cart.models import Cart, CartItem
from cart.selectors import resolve_cart
from cart.services import add_item, delete_cart, merge_session_cart, remove_item
from cart.tests.factories import CartFactory, CartItemFactory, UserFactory
from catalog.selectors import get_product_detail, product_cache_key
from catalog.tests.factories import ProductFactory
from common.exceptions import NotFound
from common.values import SessionIdentity
from django.core.cache import cache


def guest(token: str = "sess-1") -> SessionIdentity:
    return SessionIdentity(session_cart_id=token)


def test_resolve_cart_without_identity_raises_not_found():
    with pytest.raises(NotFound):
        resolve_cart(SessionIdentity())


@pytest.mark.django_db
def test_resolve_cart_without_row_is_empty_state():
    assert resolve_cart(guest()) is None


@pytest.mark.django_db
def test_first_add_creates_cart_with_fresh_prices():
    product = ProductFactory(price=Decimal("20.00"), stock=5)

    result = add_item(guest(), product.id)

    assert result.success is True
    cart = Cart.objects.get(session_cart_id="sess-1")
    item = cart.items.get()
    assert item.quantity == 1
    assert item.name == product.name
    assert item.slug == product.slug
    assert item.image == product.images[0]
    assert item.unit_price == Decimal("20.00")
    assert cart.items_price == Decimal("20.00")
    assert cart.shipping_price == Decimal("2.00")
    assert cart.tax_price == Decimal("3.00")
    assert cart.total_price == Decimal("25.00")


@pytest.mark.django_db
def test_add_existing_item_increments_by_one_while_stock_allows():
    product = ProductFactory(price=Decimal("30.00"), stock=2)
    identity = guest()

    add_item(identity, product.id)
    result = add_item(identity, product.id)

    assert result.success is True
    cart = resolve_cart(identity)
    assert cart.items.get().quantity == 2
    assert cart.items_price == Decimal("60.00")
    assert cart.shipping_price == Decimal("0.00")


@pytest.mark.django_db
def test_add_when_stock_equals_quantity_in_cart_fails_out_of_stock():
    product = ProductFactory(stock=1)
    identity = guest()
    add_item(identity, product.id)

    result = add_item(identity, product.id)

    assert result.success is False
    assert result.error == "out_of_stock"
    assert resolve_cart(identity).items.get().quantity == 1


@pytest.mark.django_db
def test_add_new_item_with_zero_stock_fails_out_of_stock():
    in_stock = ProductFactory(stock=3)
    sold_out = ProductFactory(stock=0)
    identity = guest()
    add_item(identity, in_stock.id)

    result = add_item(identity, sold_out.id)

    assert result.success is False
    assert result.error == "out_of_stock"
    assert resolve_cart(identity).items.count() == 1


@pytest.mark.django_db
def test_add_unknown_product_fails_not_found():
    result = add_item(guest(), 999999)
    assert result.success is False
    assert result.error == "not_found"
    assert not Cart.objects.exists()


@pytest.mark.django_db
def test_add_does_not_touch_product_stock():
    product = ProductFactory(stock=4)
    add_item(guest(), product.id)
    product.refresh_from_db()
    assert product.stock == 4


@pytest.mark.django_db
def test_add_invalidates_cached_product_detail():
    product = ProductFactory(stock=4)
    get_product_detail(product.slug)
    assert cache.get(product_cache_key(product.slug)) is not None

    add_item(guest(), product.id)

    assert cache.get(product_cache_key(product.slug)) is None


@pytest.mark.django_db
def test_remove_last_unit_deletes_line():
    product = ProductFactory(price=Decimal("20.00"))
    identity = guest()
    add_item(identity, product.id)

    result = remove_item(identity, product.id)

    assert result.success is True
    cart = resolve_cart(identity)
    assert cart.items.count() == 0
    assert cart.items_price == Decimal("0.00")
    assert cart.tax_price == Decimal("0.00")


@pytest.mark.django_db
def test_remove_one_of_several_units_decrements():
    product = ProductFactory(price=Decimal("20.00"), stock=5)
    identity = guest()
    add_item(identity, product.id)
    add_item(identity, product.id)
    add_item(identity, product.id)

    remove_item(identity, product.id)

    cart = resolve_cart(identity)
    assert cart.items.get().quantity == 2
    assert cart.items_price == Decimal("40.00")
    assert cart.total_price == Decimal("48.00")


@pytest.mark.django_db
def test_remove_without_cart_or_line_fails_not_found():
    product = ProductFactory()
    other = ProductFactory()
    identity = guest()

    assert remove_item(identity, product.id).error == "not_found"

    add_item(identity, other.id)
    result = remove_item(identity, product.id)
    assert result.success is False
    assert result.error == "not_found"


@pytest.mark.django_db
def test_user_cart_is_resolved_by_user_not_session():
    user = UserFactory()
    cart = CartFactory(user=user, session_cart_id="device-a")

    assert resolve_cart(SessionIdentity(user_id=user.id, session_cart_id="device-b")) == cart
    # Anonymous lookups never see a user's cart
    assert resolve_cart(guest("device-a")) is None


@pytest.mark.django_db
def test_authenticated_add_without_token_issues_one():
    user = UserFactory()
    product = ProductFactory()

    result = add_item(SessionIdentity(user_id=user.id), product.id)

    cart = Cart.objects.get(user=user)
    assert cart.session_cart_id
    assert result.data["session_cart_id"] == cart.session_cart_id


@pytest.mark.django_db
def test_first_add_reuses_user_cart_created_by_concurrent_request():
    user = UserFactory()
    existing = CartFactory(user=user)
    product = ProductFactory()

    # The lookup ran before the other request's cart was committed
    with mock.patch("cart.services.resolve_cart", return_value=None):
        result = add_item(SessionIdentity(user_id=user.id), product.id)

    assert result.success is True
    assert Cart.objects.filter(user=user).count() == 1
    assert result.data["cart_id"] == existing.id
    assert CartItem.objects.get(cart=existing).product_id == product.id


@pytest.mark.django_db
def test_delete_cart_removes_cart_and_items():
    user = UserFactory()
    item = CartItemFactory(cart=CartFactory(user=user))

    assert delete_cart(SessionIdentity(user_id=user.id)) is True
    assert not Cart.objects.filter(pk=item.cart_id).exists()
    assert not CartItem.objects.filter(pk=item.pk).exists()
    assert delete_cart(SessionIdentity(user_id=user.id)) is False


@pytest.mark.django_db
def test_merge_adopts_session_cart_when_user_has_none():
    user = UserFactory()
    cart = CartFactory(session_cart_id="sess-9")

    merged = merge_session_cart(SessionIdentity(user_id=user.id, session_cart_id="sess-9"))

    assert merged.pk == cart.pk
    cart.refresh_from_db()
    assert cart.user_id == user.id


@pytest.mark.django_db
def test_merge_keeps_existing_user_cart():
    user = UserFactory()
    own = CartFactory(user=user)
    session_cart = CartFactory(session_cart_id="sess-9")

    assert merge_session_cart(SessionIdentity(user_id=user.id, session_cart_id="sess-9")) is None
    session_cart.refresh_from_db()
    assert session_cart.user_id is None
    assert resolve_cart(SessionIdentity(user_id=user.id)) == own
