"""Build an explicit `SessionIdentity` from an incoming request.

Views call this once and pass the identity into services; nothing below the
view layer reads cookies, headers or `request.user`.
"""

from .values import SessionIdentity

SESSION_CART_HEADER = "X-Session-Cart-Id"
SESSION_CART_COOKIE = "sessionCartId"


def identity_from_request(request) -> SessionIdentity:
    user = getattr(request, "user", None)
    user_id = user.id if user is not None and user.is_authenticated else None
    token = request.headers.get(SESSION_CART_HEADER) or request.COOKIES.get(SESSION_CART_COOKIE)
    return SessionIdentity(user_id=user_id, session_cart_id=(token or "").strip() or None)
