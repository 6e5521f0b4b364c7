from __future__ import annotations

import ast
from pathlib import Path

import pytest

import spreceiver.config
from spreceiver.config import (
    ConfigurationError,
    MissingConfigurationError,
    env_int,
    get_receiver_config,
    get_server_config,
    get_sharepoint_config,
    get_site_config,
    optional_env_var,
    require_env_vars,
)
from spreceiver.config.receiver import DEFAULT_LIST_TITLE, DEFAULT_RECEIVER_PREFIX


def test_require_env_vars_returns_values(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("EXAMPLE_VAR", "value")

    result = require_env_vars(["EXAMPLE_VAR"])

    assert result["EXAMPLE_VAR"] == "value"


def test_require_env_vars_lists_every_missing_name(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("MISSING_B", raising=False)
    monkeypatch.setenv("MISSING_A", "   ")

    with pytest.raises(MissingConfigurationError) as exc:
        require_env_vars(["MISSING_B", "MISSING_A"])

    assert "MISSING_A, MISSING_B" in str(exc.value)


def test_optional_env_var_treats_blank_as_unset(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("EXAMPLE_VAR", "  ")
    assert optional_env_var("EXAMPLE_VAR") is None

    monkeypatch.setenv("EXAMPLE_VAR", " padded ")
    assert optional_env_var("EXAMPLE_VAR") == "padded"


def test_env_int_rejects_garbage(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("EXAMPLE_PORT", "eighty")

    with pytest.raises(ConfigurationError, match="EXAMPLE_PORT"):
        env_int("EXAMPLE_PORT", 80)


def test_receiver_config_defaults() -> None:
    config = get_receiver_config()

    assert config.list_title == DEFAULT_LIST_TITLE == "MyList"
    assert config.receiver_prefix == DEFAULT_RECEIVER_PREFIX


def test_receiver_config_from_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("SPRECEIVER_LIST_TITLE", "Invoices")
    monkeypatch.setenv("SPRECEIVER_RECEIVER_PREFIX", "Contoso.Invoices.Receiver")

    config = get_receiver_config()

    assert config.list_title == "Invoices"
    assert config.receiver_prefix == "Contoso.Invoices.Receiver"


def test_receiver_prefix_must_not_end_with_dot(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("SPRECEIVER_RECEIVER_PREFIX", "Contoso.")

    with pytest.raises(ConfigurationError, match="SPRECEIVER_RECEIVER_PREFIX"):
        get_receiver_config()


def test_server_config(monkeypatch: pytest.MonkeyPatch) -> None:
    assert get_server_config().port == 8080

    monkeypatch.setenv("SPRECEIVER_HOST", "0.0.0.0")
    monkeypatch.setenv("SPRECEIVER_PORT", "9000")

    config = get_server_config()
    assert (config.host, config.port) == ("0.0.0.0", 9000)


def test_sharepoint_config_retries_only_throttling() -> None:
    config = get_sharepoint_config()

    assert config.access_token is None
    assert config.resilience.name == "sharepoint"
    assert config.resilience.retry.status_forcelist == frozenset({429, 503})
    assert "POST" in config.resilience.retry.allowed_methods


def test_site_config_requires_url_and_token(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("SHAREPOINT_SITE_URL", "https://contoso.sharepoint.com/sites/team/")

    with pytest.raises(MissingConfigurationError, match="SHAREPOINT_ACCESS_TOKEN"):
        get_site_config()

    monkeypatch.setenv("SHAREPOINT_ACCESS_TOKEN", "token")
    site = get_site_config()
    assert site.site_url == "https://contoso.sharepoint.com/sites/team"
    assert site.access_token == "token"


def test_config_package_does_not_import_domain() -> None:
    package_dir = Path(spreceiver.config.__file__).parent
    imported: set[str] = set()
    for module_path in package_dir.glob("*.py"):
        for node in ast.walk(ast.parse(module_path.read_text(encoding="utf-8"))):
            if isinstance(node, ast.ImportFrom) and node.module:
                imported.add(node.module)
            elif isinstance(node, ast.Import):
                imported.update(alias.name for alias in node.names)

    assert not {name for name in imported if name.startswith("spreceiver.domain")}
