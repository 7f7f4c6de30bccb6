from __future__ import annotations

import os
from dataclasses import dataclass

import stripe
from supabase import Client, ClientOptions, create_client


def _env_bool(name: str, default: bool = False) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "y", "on"}


def _env_str(name: str) -> str | None:
    raw = os.getenv(name)
    if raw is None:
        return None
    return raw.strip() or None


def _env_float(name: str, default: float) -> float:
    raw = _env_str(name)
    return float(raw) if raw is not None else default


@dataclass(frozen=True, slots=True)
class SupabaseRuntimeConfig:
    url: str | None
    api_key: str | None
    timeout_s: float

    @staticmethod
    def from_env() -> "SupabaseRuntimeConfig":
        return SupabaseRuntimeConfig(
            url=_env_str("SUPABASE_URL"),
            api_key=_env_str("SUPABASE_KEY") or _env_str("SUPABASE_ANON_KEY"),
            timeout_s=_env_float("SUPABASE_TIMEOUT_S", 10.0),
        )

    @property
    def configured(self) -> bool:
        return bool(self.url and self.api_key)


@dataclass(frozen=True, slots=True)
class StripeRuntimeConfig:
    secret_key: str | None
    api_base: str
    max_network_retries: int

    @staticmethod
    def from_env() -> "StripeRuntimeConfig":
        return StripeRuntimeConfig(
            secret_key=_env_str("STRIPE_SECRET_KEY"),
            api_base=_env_str("STRIPE_API_BASE") or "https://api.stripe.com",
            max_network_retries=int(_env_float("STRIPE_MAX_NETWORK_RETRIES", 2)),
        )


@dataclass(frozen=True, slots=True)
class AppRuntimeConfig:
    backend: str
    frontend_url: str
    local_feed_post_limit: int
    reveal_errors: bool

    @staticmethod
    def from_env() -> "AppRuntimeConfig":
        """Resolve app-level settings.

        Backend priority:
          1) CHARITEASE_BACKEND (explicit: "supabase" or "memory")
          2) "supabase" when SUPABASE_URL is set
          3) "memory"
        """

        backend = (_env_str("CHARITEASE_BACKEND") or "").lower()
        if not backend:
            backend = "supabase" if _env_str("SUPABASE_URL") else "memory"

        return AppRuntimeConfig(
            backend=backend,
            frontend_url=_env_str("FRONTEND_URL") or "https://yourapp.com",
            local_feed_post_limit=int(_env_float("LOCAL_FEED_POST_LIMIT", 100)),
            reveal_errors=_env_bool("CHARITEASE_REVEAL_ERRORS", False),
        )


def supabase_client(cfg: SupabaseRuntimeConfig | None = None) -> Client:
    cfg = cfg or SupabaseRuntimeConfig.from_env()
    if not cfg.url or not cfg.api_key:
        raise RuntimeError("SUPABASE_URL / SUPABASE_KEY are not configured")
    return create_client(
        cfg.url,
        cfg.api_key,
        options=ClientOptions(postgrest_client_timeout=cfg.timeout_s),
    )


def stripe_client(cfg: StripeRuntimeConfig | None = None) -> stripe.StripeClient:
    cfg = cfg or StripeRuntimeConfig.from_env()
    if not cfg.secret_key:
        raise RuntimeError("STRIPE_SECRET_KEY is not configured")
    return stripe.StripeClient(
        cfg.secret_key,
        base_addresses={"api": cfg.api_base},
        max_network_retries=cfg.max_network_retries,
    )
