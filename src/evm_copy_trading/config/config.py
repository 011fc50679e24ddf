# -*- coding: utf-8 -*-
"""Configuration loaded from environment via Pydantic Settings.

Nested env vars use <section>__<key>, e.g. LOGGING__CONSOLE_LEVEL, TRADING__SLIPPAGE_BPS.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Any, Literal, Optional

from pydantic import Field, computed_field
from pydantic_settings import BaseSettings, SettingsConfigDict


class AppSettings(BaseSettings):
    """General application configuration."""

    model_config = SettingsConfigDict(extra="ignore")

    app_name: str = "evm-copy-trading"
    service_name: Optional[str] = None
    service_version: Optional[str] = None
    environment: Literal["development", "test", "production"] = "development"


class LoggingSettings(BaseSettings):
    """Structured logging configuration for structlog/stdlib/Logfire."""

    model_config = SettingsConfigDict(extra="ignore")

    console_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    file_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    logfire_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"

    log_to_console: bool = True
    log_to_file: bool = False
    log_file_path: str = "logs/copy_trading.log"
    # TimedRotatingFileHandler: when to rotate (S/M/H/D/W0–W6/midnight), interval, backups to keep
    log_file_when: Literal[
        "S", "M", "H", "D", "W0", "W1", "W2", "W3", "W4", "W5", "W6", "midnight"
    ] = "midnight"
    log_file_interval: int = 1
    log_file_backup_count: int = 30
    log_file_utc: bool = True

    # Main output format: JSONRenderer if True, ConsoleRenderer if False
    json_format: bool = False

    logfire_enabled: bool = False
    logfire_token: Optional[str] = None


class ApiSettings(BaseSettings):
    """Shared HTTP client configuration (aiohttp session)."""

    model_config = SettingsConfigDict(extra="ignore")

    timeout_seconds: float = Field(
        default=15.0,
        ge=1.0,
        le=120.0,
        description="Default HTTP request timeout in seconds.",
    )


class ServerSettings(BaseSettings):
    """Inbound webhook server (from env SERVER__*)."""

    model_config = SettingsConfigDict(extra="ignore")

    host: str = Field(default="0.0.0.0", description="Interface to bind.")
    port: int = Field(default=3000, ge=1, le=65535, description="Listen port.")
    webhook_paths: tuple[str, ...] = Field(
        default=("/", "/webhook"),
        min_length=1,
        description="Paths that accept POSTed notifications (JSON list in env).",
    )
    signing_key: Optional[str] = Field(
        default=None,
        description="Webhook HMAC-SHA256 signing key. Verification is skipped when unset.",
    )


class ChainSettings(BaseSettings):
    """Chain node and signing wallet (from env CHAIN__*)."""

    model_config = SettingsConfigDict(extra="ignore")

    rpc_url: str = Field(default="", description="JSON-RPC endpoint of the chain node.")
    chain_id: int = Field(default=8453, description="Chain ID (8453 for Base).")
    network: str = Field(
        default="BASE_MAINNET",
        description="Network name as reported in webhook payloads.",
    )
    private_key: Optional[str] = Field(default=None, description="Signing wallet private key.")
    explorer_tx_url: str = Field(
        default="https://basescan.org/tx/",
        description="Block explorer prefix for transaction links.",
    )
    rpc_timeout_seconds: float = Field(default=30.0, ge=1.0, le=300.0)
    receipt_poll_seconds: float = Field(
        default=1.0,
        ge=0.05,
        le=60.0,
        description="Polling interval while waiting for a broadcast transaction to confirm.",
    )


class TrackingSettings(BaseSettings):
    """Watched address and event admission (from env TRACKING__*)."""

    model_config = SettingsConfigDict(extra="ignore")

    target_wallet: str = Field(default="", description="Address whose swaps are copied.")
    dedup_ttl_seconds: float = Field(
        default=60.0,
        gt=0.0,
        le=3600.0,
        description="How long a processed transaction hash is remembered.",
    )
    dedup_max_entries: int = Field(
        default=100_000,
        ge=1,
        description="Upper bound on live remembered hashes; new hashes are refused when full.",
    )
    receipt_retry_delay_seconds: float = Field(
        default=0.5,
        ge=0.0,
        le=10.0,
        description="Delay before the single receipt-fetch retry.",
    )
    min_token_transfers: int = Field(
        default=2,
        ge=1,
        description="Token transfers in the notification needed to skip the receipt fetch.",
    )


class TradingSettings(BaseSettings):
    """Trade sizing and fee policy (from env TRADING__*)."""

    model_config = SettingsConfigDict(extra="ignore")

    buy_amount_eth: str = Field(
        default="0.0001",
        description="Native amount spent per copied trade, in ether units.",
    )
    slippage_bps: int = Field(default=5000, ge=1, le=10_000)
    max_fee_per_gas: int = Field(default=200_000_000, ge=0, description="Wei.")
    max_priority_fee_per_gas: int = Field(default=50_000_000, ge=0, description="Wei.")
    gas_limit_multiplier: float = Field(default=1.2, ge=1.0, le=5.0)
    # Raw string from env so pydantic-settings does not try to JSON-decode it.
    blacklist_tokens_raw: str = Field(
        default="",
        description="Token addresses never bought, comma-separated. Env: TRADING__BLACKLIST_TOKENS.",
        validation_alias="blacklist_tokens",
    )

    @computed_field
    @property
    def blacklist_tokens(self) -> frozenset[str]:
        """Parse blacklist_tokens_raw into a set of lower-cased addresses."""
        if not self.blacklist_tokens_raw or not self.blacklist_tokens_raw.strip():
            return frozenset()
        return frozenset(
            s.strip().lower() for s in self.blacklist_tokens_raw.split(",") if s.strip()
        )


class AggregatorSettings(BaseSettings):
    """0x swap aggregator (from env AGGREGATOR__*)."""

    model_config = SettingsConfigDict(extra="ignore")

    zerox_host: str = Field(default="https://api.0x.org", description="0x API base URL.")
    quote_path: str = Field(default="/swap/allowance-holder/quote")
    api_key: Optional[str] = Field(default=None, description="0x API key.")
    api_version: str = Field(default="v2")
    timeout_seconds: float = Field(
        default=3.0,
        gt=0.0,
        le=30.0,
        description="Quote timeout. Quotes are never retried.",
    )


class TelegramNotificationSettings(BaseSettings):
    """Telegram notifications (from env TELEGRAM__*)."""

    model_config = SettingsConfigDict(extra="ignore")

    enabled: bool = False
    api_key: Optional[str] = Field(default=None, description="Telegram bot API key.")
    chat_id: Optional[str] = Field(default=None, description="Telegram chat ID.")
    messages_per_minute: int = Field(default=30, ge=1, le=120)
    max_retries: int = Field(default=5, ge=0, le=20)
    backoff_base_seconds: float = Field(default=1.0, ge=0.1, le=60.0)
    connect_timeout: float = Field(default=10.0, ge=0.1, le=60.0)
    read_timeout: float = Field(default=20.0, ge=0.1, le=120.0)
    write_timeout: float = Field(default=20.0, ge=0.1, le=120.0)
    pool_timeout: float = Field(default=5.0, ge=0.1, le=60.0)


class ConsoleNotificationSettings(BaseSettings):
    """Console notification settings."""

    model_config = SettingsConfigDict(extra="ignore")

    enabled: bool = True


class Settings(BaseSettings):
    """Root application configuration.

    Groups all sub-configurations so the rest of the code does not
    read environment variables directly. Nested overrides use
    <section>__<key>, e.g. TRACKING__TARGET_WALLET, CHAIN__RPC_URL.
    """

    model_config = SettingsConfigDict(
        env_nested_delimiter="__",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        frozen=True,
    )

    app: AppSettings = Field(default_factory=AppSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)
    api: ApiSettings = Field(default_factory=ApiSettings)
    server: ServerSettings = Field(default_factory=ServerSettings)
    chain: ChainSettings = Field(default_factory=ChainSettings)
    tracking: TrackingSettings = Field(default_factory=TrackingSettings)
    trading: TradingSettings = Field(default_factory=TradingSettings)
    aggregator: AggregatorSettings = Field(default_factory=AggregatorSettings)
    telegram: TelegramNotificationSettings = Field(default_factory=TelegramNotificationSettings)
    console: ConsoleNotificationSettings = Field(default_factory=ConsoleNotificationSettings)

    @classmethod
    def from_env(cls, **overrides: Any) -> Settings:
        """Build settings from environment (and .env), with optional overrides.

        Nested overrides can be passed as nested dicts, e.g.
        from_env(trading={"slippage_bps": 100}).
        """
        return cls(**overrides)

    def missing_required(self) -> list[str]:
        """Return env names of required values that are not set."""
        missing: list[str] = []
        if not self.tracking.target_wallet.strip():
            missing.append("TRACKING__TARGET_WALLET")
        if not self.chain.rpc_url.strip():
            missing.append("CHAIN__RPC_URL")
        if not self.chain.private_key:
            missing.append("CHAIN__PRIVATE_KEY")
        if not self.aggregator.api_key:
            missing.append("AGGREGATOR__API_KEY")
        return missing


@lru_cache
def get_settings() -> Settings:
    """Return a single cached instance of Settings.

    Typical usage:

        from evm_copy_trading.config import get_settings

        settings = get_settings()
        target = settings.tracking.target_wallet
    """
    return Settings()
