from .payments import (
    CharityAccountNotReady,
    InvalidDonationRequest,
    PaymentError,
    PaymentProviderError,
)
from .records import RecordStoreError

__all__ = [
    "CharityAccountNotReady",
    "InvalidDonationRequest",
    "PaymentError",
    "PaymentProviderError",
    "RecordStoreError",
]
