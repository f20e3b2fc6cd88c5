"""Structured results returned by mutating storefront operations."""

import functools
from dataclasses import dataclass
from typing import Any, Callable, Optional

from .exceptions import StorefrontError, Unauthenticated


@dataclass(frozen=True)
class ActionResult:
    """Outcome of a mutating operation.

    Callers branch on `success`; `redirect_to` points the client at the page
    where the user can fix the problem, `error` carries the domain error code.
    """

    success: bool
    message: str
    redirect_to: Optional[str] = None
    data: Any = None
    error: Optional[str] = None

    @classmethod
    def ok(cls, message: str, *, data: Any = None, redirect_to: Optional[str] = None) -> "ActionResult":
        return cls(success=True, message=message, data=data, redirect_to=redirect_to)

    @classmethod
    def fail(cls, message: str, *, redirect_to: Optional[str] = None, error: Optional[str] = None) -> "ActionResult":
        return cls(success=False, message=message, redirect_to=redirect_to, error=error)

    @classmethod
    def from_error(cls, exc: StorefrontError) -> "ActionResult":
        return cls.fail(exc.message, error=exc.code)

    def as_dict(self) -> dict:
        body: dict = {"success": self.success, "message": self.message}
        if self.redirect_to is not None:
            body["redirectTo"] = self.redirect_to
        if self.data is not None:
            body["data"] = self.data
        if self.error is not None:
            body["error"] = self.error
        return body


def as_action_result(func: Callable[..., ActionResult]) -> Callable[..., ActionResult]:
    """Convert domain errors raised by `func` into a failure `ActionResult`.

    `Unauthenticated` is re-raised unchanged, as is anything that is not a
    `StorefrontError`.
    """

    @functools.wraps(func)
    def wrapper(*args, **kwargs) -> ActionResult:
        try:
            return func(*args, **kwargs)
        except Unauthenticated:
            raise
        except StorefrontError as exc:
            return ActionResult.from_error(exc)

    return wrapper


ERROR_STATUS = {
    "not_found": 404,
    "already_paid": 409,
}


def result_status(result: ActionResult, *, success_status: int = 200) -> int:
    """HTTP status code for a result, used by the thin API views."""

    if result.success:
        return success_status
    return ERROR_STATUS.get(result.error or "", 400)
