"""Application configuration helpers."""

from __future__ import annotations

from .env import env_int, optional_env_var, require_env_vars
from .errors import ConfigurationError, MissingConfigurationError
from .http_resilience import RateLimit, ResilienceConfig, RetryPolicy
from .logging import configure_logging
from .receiver import ReceiverConfig, get_receiver_config
from .server import ServerConfig, get_server_config
from .sharepoint import SharePointConfig, SiteConfig, get_sharepoint_config, get_site_config

__all__ = [
    "ConfigurationError",
    "MissingConfigurationError",
    "RateLimit",
    "ReceiverConfig",
    "ResilienceConfig",
    "RetryPolicy",
    "ServerConfig",
    "SharePointConfig",
    "SiteConfig",
    "configure_logging",
    "env_int",
    "get_receiver_config",
    "get_server_config",
    "get_sharepoint_config",
    "get_site_config",
    "optional_env_var",
    "require_env_vars",
]
