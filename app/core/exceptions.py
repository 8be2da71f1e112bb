from typing import Any, Dict, Optional


class PaymentError(Exception):
    """
    Base class for errors that map onto an HTTP response.

    `error` is the short, client-facing label; `message` is the optional
    human readable detail (for gateway failures, the gateway's own message).
    """

    status_code: int = 500

    def __init__(self, error: str, message: Optional[str] = None):
        super().__init__(message or error)
        self.error = error
        self.message = message

    def to_dict(self) -> Dict[str, Any]:
        body = {"error": self.error}
        if self.message is not None:
            body["message"] = self.message
        return body


class ValidationError(PaymentError):
    """Missing or malformed client input. Never reaches the gateway."""

    status_code = 400


class GatewayError(PaymentError):
    """A call to the payment gateway failed."""

    status_code = 500

    def __init__(self, message: str, original_error: Optional[Exception] = None):
        super().__init__("Gateway request failed", message)
        self.original_error = original_error


class SignatureMismatchError(PaymentError):
    status_code = 400

    def __init__(self):
        super().__init__("Invalid signature", "Payment verification failed")
