"""HTTP server settings."""

from __future__ import annotations

from dataclasses import dataclass

from .env import env_int, optional_env_var

DEFAULT_HOST = "127.0.0.1"
DEFAULT_PORT = 8080


@dataclass(frozen=True, slots=True)
class ServerConfig:
    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT


def get_server_config() -> ServerConfig:
    return ServerConfig(
        host=optional_env_var("SPRECEIVER_HOST") or DEFAULT_HOST,
        port=env_int("SPRECEIVER_PORT", DEFAULT_PORT),
    )
