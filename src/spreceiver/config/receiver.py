"""Settings for the remote event receiver itself."""

from __future__ import annotations

from dataclasses import dataclass

from .env import optional_env_var
from .errors import ConfigurationError

DEFAULT_LIST_TITLE = "MyList"
DEFAULT_RECEIVER_PREFIX = "Spreceiver.Services.AppEventReceiver"


@dataclass(frozen=True, slots=True)
class ReceiverConfig:
    list_title: str = DEFAULT_LIST_TITLE
    receiver_prefix: str = DEFAULT_RECEIVER_PREFIX


def get_receiver_config() -> ReceiverConfig:
    prefix = optional_env_var("SPRECEIVER_RECEIVER_PREFIX") or DEFAULT_RECEIVER_PREFIX
    if prefix.endswith("."):
        raise ConfigurationError("SPRECEIVER_RECEIVER_PREFIX must not end with a dot")
    return ReceiverConfig(
        list_title=optional_env_var("SPRECEIVER_LIST_TITLE") or DEFAULT_LIST_TITLE,
        receiver_prefix=prefix,
    )
