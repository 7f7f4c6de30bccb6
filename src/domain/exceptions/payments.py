class PaymentError(Exception):
    """Base exception for donation/payment failures.

    `type` mirrors the payment processor's error type so it can be relayed to
    the client unchanged.
    """

    def __init__(self, message: str, type: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.type = type


class InvalidDonationRequest(PaymentError):
    """Raised when a donation request is missing data or below the minimum."""

    def __init__(self, message: str) -> None:
        super().__init__(message, type="invalid_request_error")


class CharityAccountNotReady(PaymentError):
    """Raised when a charity's connected account cannot accept charges yet."""

    def __init__(self, account_id: str) -> None:
        super().__init__(
            "Charity account is not ready to accept payments",
            type="invalid_request_error",
        )
        self.account_id = account_id


class PaymentProviderError(PaymentError):
    """Raised when the payment processor rejects a call."""
