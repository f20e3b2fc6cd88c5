"""Domain error taxonomy shared by the storefront apps.

Services raise these for expected business failures; the `as_action_result`
decorator in `common.results` turns them into structured failure results.
Services translate database faults inside their transactions into
`TransactionFailed`; programming errors are never wrapped.
"""


class StorefrontError(Exception):
    """Base class for expected domain failures."""

    code = "error"
    default_message = "Unable to complete the request."

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class NotFound(StorefrontError):
    code = "not_found"
    default_message = "Not found."


class ValidationFailed(StorefrontError):
    code = "validation_failed"
    default_message = "Invalid input."

    def __init__(self, message: str | None = None, errors: dict | None = None):
        super().__init__(message)
        self.errors = errors or {}


class OutOfStock(StorefrontError):
    code = "out_of_stock"
    default_message = "Not enough stock."


class AlreadyPaid(StorefrontError):
    code = "already_paid"
    default_message = "Order is already paid."


class PaymentVerificationFailed(StorefrontError):
    code = "payment_verification_failed"
    default_message = "Payment could not be verified."


class NotPaid(StorefrontError):
    code = "not_paid"
    default_message = "Order is not paid."


class Unauthenticated(StorefrontError):
    """Raised when an operation requires a signed-in user.

    Never converted into a failure result; it propagates to the caller.
    """

    code = "unauthenticated"
    default_message = "User is not authenticated."


class TransactionFailed(StorefrontError):
    """A database fault aborted the operation's transaction; nothing was written."""

    code = "transaction_failed"
    default_message = "The operation could not be completed. Please try again."
