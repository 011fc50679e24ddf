"""Configuration subpackage."""

from evm_copy_trading.config.config import (
    AggregatorSettings,
    ApiSettings,
    AppSettings,
    ChainSettings,
    ConsoleNotificationSettings,
    LoggingSettings,
    ServerSettings,
    Settings,
    TelegramNotificationSettings,
    TrackingSettings,
    TradingSettings,
    get_settings,
)

__all__ = [
    "AggregatorSettings",
    "ApiSettings",
    "AppSettings",
    "ChainSettings",
    "ConsoleNotificationSettings",
    "LoggingSettings",
    "ServerSettings",
    "Settings",
    "TelegramNotificationSettings",
    "TrackingSettings",
    "TradingSettings",
    "get_settings",
]
