from .payment_processor import IPaymentProcessor
from .record_store import IRecordStore, Row

__all__ = [
    "IPaymentProcessor",
    "IRecordStore",
    "Row",
]
