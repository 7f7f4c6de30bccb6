from __future__ import annotations

from functools import lru_cache

from src.adapters.payments.stripe_payment_processor import StripePaymentProcessor
from src.adapters.persistence import InMemoryRecordStore, SupabaseRecordStore
from src.adapters.runtime import AppRuntimeConfig
from src.app.ports.output import IRecordStore
from src.app.services.donation_service import DonationService
from src.app.services.local_feed_service import LocalFeedService


@lru_cache(maxsize=1)
def _memory_store() -> InMemoryRecordStore:
    # One store per process so writes are visible to later requests.
    return InMemoryRecordStore()


@lru_cache(maxsize=1)
def _supabase_store() -> SupabaseRecordStore:
    return SupabaseRecordStore()


def get_record_store() -> IRecordStore:
    cfg = AppRuntimeConfig.from_env()
    if cfg.backend == "supabase":
        return _supabase_store()
    if cfg.backend == "memory":
        return _memory_store()
    raise RuntimeError(f"Unknown CHARITEASE_BACKEND: {cfg.backend}")


def get_local_feed_service() -> LocalFeedService:
    cfg = AppRuntimeConfig.from_env()
    return LocalFeedService(
        record_store=get_record_store(), post_limit=cfg.local_feed_post_limit
    )


def get_donation_service() -> DonationService:
    cfg = AppRuntimeConfig.from_env()
    return DonationService(
        payment_processor=StripePaymentProcessor(),
        record_store=get_record_store(),
        frontend_url=cfg.frontend_url,
    )
