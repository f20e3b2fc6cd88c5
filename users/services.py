"""User account and administration services.

Each mutation returns an `ActionResult`; domain errors are converted at the
boundary by `as_action_result`.
"""

import logging

from cart.services import delete_cart
from common.choices import UserRole
from common.exceptions import NotFound, ValidationFailed
from common.results import ActionResult, as_action_result
from common.values import SessionIdentity
from django.db import transaction

from .models import User

logger = logging.getLogger("auth")


def get_user_by_id(user_id: int) -> User:
    try:
        return User.objects.get(pk=user_id)
    except User.DoesNotExist:
        raise NotFound("User not found.")


def _clean_name(name: str) -> str:
    name = (name or "").strip()
    if len(name) < 3:
        raise ValidationFailed("Name must be at least 3 characters.", errors={"name": ["Too short."]})
    return name


@as_action_result
def update_profile(*, user_id: int, name: str) -> ActionResult:
    """Update the signed-in user's display name. Email changes are not handled here."""

    user = get_user_by_id(user_id)
    user.name = _clean_name(name)
    user.save(update_fields=["name"])
    return ActionResult.ok("User profile updated successfully.")


@as_action_result
def update_user(*, user_id: int, name: str, role: str) -> ActionResult:
    """Administrator update of a user's name and role."""

    if role not in UserRole.values:
        raise ValidationFailed("Invalid role.", errors={"role": [f"Must be one of {', '.join(UserRole.values)}."]})
    user = get_user_by_id(user_id)
    user.name = _clean_name(name)
    user.role = role
    user.save(update_fields=["name", "role", "is_staff"])
    logger.info("auth.user_updated", extra={"event": "auth.user_updated", "user_id": user.id, "role": role})
    return ActionResult.ok("User updated successfully.")


@as_action_result
def delete_user(*, user_id: int) -> ActionResult:
    """Administrator removal of a user. Past orders keep their snapshot and lose the link."""

    user = get_user_by_id(user_id)
    with transaction.atomic():
        user.delete()
    logger.info("auth.user_deleted", extra={"event": "auth.user_deleted", "user_id": user_id})
    return ActionResult.ok("User deleted successfully.")


def sign_out(identity: SessionIdentity) -> bool:
    """Drop the caller's cart so the next person on this device starts empty.

    Returns True if a cart was deleted.
    """

    deleted = delete_cart(identity)
    if not deleted:
        logger.warning(
            "auth.signout_no_cart",
            extra={"event": "auth.signout_no_cart", "user_id": identity.user_id},
        )
    return deleted
