import pytest
from cart.models import Cart
from cart.tests.factories import CartFactory, CartItemFactory, UserFactory
from rest_framework.test import APIClient


def sign_in(client: APIClient, user, **headers):
    return client.post(
        "/api/v1/auth/signin/",
        {"email": user.email, "password": "pass1234"},
        format="json",
        **headers,
    )


@pytest.mark.django_db
def test_signin_and_me():
    user = UserFactory(email="JDoe@Example.com")
    client = APIClient()

    resp = sign_in(client, user)
    assert resp.status_code == 200
    access = resp.json()["access"]

    client.credentials(HTTP_AUTHORIZATION=f"Bearer {access}")
    me = client.get("/api/v1/account/me/")
    assert me.status_code == 200
    assert me.json()["email"] == "jdoe@example.com"
    assert me.json()["role"] == "user"


@pytest.mark.django_db
def test_signin_with_wrong_password_fails():
    user = UserFactory()
    resp = APIClient().post("/api/v1/auth/signin/", {"email": user.email, "password": "wrong-pass"}, format="json")
    assert resp.status_code == 400


@pytest.mark.django_db
def test_signin_adopts_anonymous_session_cart():
    user = UserFactory()
    cart = CartFactory(session_cart_id="sess-42")

    resp = sign_in(APIClient(), user, HTTP_X_SESSION_CART_ID="sess-42")

    assert resp.status_code == 200
    cart.refresh_from_db()
    assert cart.user_id == user.id


@pytest.mark.django_db
def test_signout_blacklists_token_and_deletes_cart():
    user = UserFactory()
    CartItemFactory(cart=CartFactory(user=user))
    client = APIClient()
    tokens = sign_in(client, user).json()

    resp = client.post("/api/v1/auth/signout/", {"refresh": tokens["refresh"]}, format="json")

    assert resp.status_code == 205
    assert not Cart.objects.filter(user=user).exists()
    reuse = client.post("/api/v1/auth/refresh/", {"refresh": tokens["refresh"]}, format="json")
    assert reuse.status_code == 401


@pytest.mark.django_db
def test_signout_with_invalid_token():
    resp = APIClient().post("/api/v1/auth/signout/", {"refresh": "garbage"}, format="json")
    assert resp.status_code == 400
