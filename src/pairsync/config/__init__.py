"""Configuration management for pairsync."""

from .settings import LoggingConfig, PairConfig, SyncConfig, SyncOptions

__all__ = ["SyncConfig", "PairConfig", "SyncOptions", "LoggingConfig"]
