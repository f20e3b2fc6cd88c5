import pytest
from cart.models import Cart
from cart.tests.factories import AdminFactory, CartFactory, UserFactory
from common.values import SessionIdentity
from orders.tests.factories import OrderFactory
from rest_framework.test import APIClient
from users.models import User
from users.services import delete_user, sign_out, update_profile, update_user


@pytest.mark.django_db
def test_role_keeps_staff_flag_in_sync():
    user = UserFactory()
    assert user.is_staff is False

    result = update_user(user_id=user.id, name="Promoted Person", role="admin")

    assert result.success is True
    user.refresh_from_db()
    assert user.role == "admin"
    assert user.is_staff is True
    assert user.name == "Promoted Person"


@pytest.mark.django_db
def test_update_user_rejects_unknown_role_and_missing_user():
    user = UserFactory()
    assert update_user(user_id=user.id, name="Some Name", role="owner").error == "validation_failed"
    assert update_user(user_id=999999, name="Some Name", role="user").error == "not_found"


@pytest.mark.django_db
def test_update_profile_requires_three_characters():
    user = UserFactory()
    assert update_profile(user_id=user.id, name="Al").error == "validation_failed"
    assert update_profile(user_id=user.id, name="  Alice  ").success is True
    user.refresh_from_db()
    assert user.name == "Alice"


@pytest.mark.django_db
def test_delete_user_keeps_their_orders():
    order = OrderFactory()
    user_id = order.user_id

    assert delete_user(user_id=user_id).success is True

    assert not User.objects.filter(pk=user_id).exists()
    order.refresh_from_db()
    assert order.user_id is None
    assert delete_user(user_id=user_id).error == "not_found"


@pytest.mark.django_db
def test_sign_out_deletes_session_cart():
    CartFactory(session_cart_id="sess-7")
    assert sign_out(SessionIdentity(session_cart_id="sess-7")) is True
    assert not Cart.objects.filter(session_cart_id="sess-7").exists()
    assert sign_out(SessionIdentity(session_cart_id="sess-7")) is False


@pytest.mark.django_db
def test_admin_user_endpoints():
    target = UserFactory()
    admin = APIClient()
    admin.force_authenticate(user=AdminFactory())

    resp = admin.patch(f"/api/v1/admin/users/{target.id}/", {"name": "New Name", "role": "admin"}, format="json")
    assert resp.status_code == 200
    assert admin.delete(f"/api/v1/admin/users/{target.id}/").status_code == 200
    assert admin.delete(f"/api/v1/admin/users/{target.id}/").status_code == 404

    customer = APIClient()
    customer.force_authenticate(user=UserFactory())
    assert customer.delete(f"/api/v1/admin/users/{AdminFactory().id}/").status_code == 403


@pytest.mark.django_db
def test_profile_endpoint_updates_name():
    user = UserFactory()
    client = APIClient()
    client.force_authenticate(user=user)
    resp = client.patch("/api/v1/account/profile/", {"name": "Renamed User"}, format="json")
    assert resp.status_code == 200
    user.refresh_from_db()
    assert user.name == "Renamed User"
