"""Resolving raw SMTP settings into SmtpConfig."""

from __future__ import annotations

import logging
from typing import Any

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from smtp_adapter.adapters.smtp.config import (
    DEFAULT_TRANSPORT,
    SmtpConfig,
    redact,
    resolve_smtp_config,
)
from smtp_adapter.domain.enums import AuthMode, TlsMode, TlsVersion
from smtp_adapter.domain.errors import ConfigurationError
from smtp_adapter.domain.values import EnvRef

_BASE: dict[str, Any] = {"server": "smtp.test.com", "port": 587}

# ======================== Required keys ========================


@pytest.mark.os_agnostic
def test_missing_server_and_port_are_both_reported() -> None:
    with pytest.raises(ConfigurationError) as exc_info:
        resolve_smtp_config({"username": "u"}, environ={})

    assert exc_info.value.missing_keys == ("server", "port")
    assert "Key server is required" in str(exc_info.value)
    assert "Key port is required" in str(exc_info.value)


@pytest.mark.os_agnostic
@pytest.mark.parametrize("empty", [None, ""])
def test_empty_required_value_counts_as_missing(empty: object) -> None:
    with pytest.raises(ConfigurationError) as exc_info:
        resolve_smtp_config({"server": empty, "port": 25}, environ={})

    assert exc_info.value.missing_keys == ("server",)


@pytest.mark.os_agnostic
def test_unset_indirection_for_required_key_counts_as_missing() -> None:
    with pytest.raises(ConfigurationError) as exc_info:
        resolve_smtp_config({"server": {"system": "SMTP_SERVER"}, "port": 25}, environ={})

    assert exc_info.value.missing_keys == ("server",)


@pytest.mark.os_agnostic
def test_error_carries_redacted_raw_config() -> None:
    with pytest.raises(ConfigurationError) as exc_info:
        resolve_smtp_config({"password": "s3cret"}, environ={})

    assert exc_info.value.raw_config == {"password": "[REDACTED]"}
    assert "s3cret" not in str(exc_info.value)


# ======================== Defaults ========================


@pytest.mark.os_agnostic
def test_minimal_config_gets_exact_defaults() -> None:
    config = resolve_smtp_config({"server": "smtp.test.com", "port": 587}, environ={})

    assert config == SmtpConfig(
        relay="smtp.test.com",
        port=587,
        tls=TlsMode.IF_AVAILABLE,
        ssl=False,
        retries=1,
        auth=AuthMode.IF_AVAILABLE,
        transport=DEFAULT_TRANSPORT,
    )


@pytest.mark.os_agnostic
def test_explicit_values_win_over_defaults() -> None:
    config = resolve_smtp_config({**_BASE, "tls": "never", "retries": 3, "transport": "memory"}, environ={})

    assert config.tls is TlsMode.NEVER
    assert config.retries == 3
    assert config.transport == "memory"


# ======================== Indirections ========================


@pytest.mark.os_agnostic
def test_indirection_reads_environment(smtp_environ: dict[str, str]) -> None:
    raw = {**_BASE, "username": {"system": "SMTP_USERNAME"}, "password": EnvRef("SMTP_PASSWORD")}

    config = resolve_smtp_config(raw, environ=smtp_environ)

    assert config.username == "mailer"
    assert config.password == "s3cret"


@pytest.mark.os_agnostic
def test_environment_is_reread_on_every_call(monkeypatch: pytest.MonkeyPatch) -> None:
    raw = {**_BASE, "password": {"system": "ROTATING_SMTP_PASSWORD"}}

    monkeypatch.setenv("ROTATING_SMTP_PASSWORD", "first")
    first = resolve_smtp_config(raw)
    monkeypatch.setenv("ROTATING_SMTP_PASSWORD", "second")
    second = resolve_smtp_config(raw)

    assert (first.password, second.password) == ("first", "second")


@pytest.mark.os_agnostic
def test_unset_optional_indirection_is_absent() -> None:
    config = resolve_smtp_config({**_BASE, "username": {"system": "NOT_SET_ANYWHERE"}}, environ={})

    assert config.username is None


@pytest.mark.os_agnostic
def test_port_from_environment_text_is_parsed() -> None:
    config = resolve_smtp_config({"server": "mx", "port": {"system": "SMTP_PORT"}}, environ={"SMTP_PORT": "2525"})

    assert config.port == 2525


# ======================== Coercion ========================


@pytest.mark.os_agnostic
@pytest.mark.parametrize(
    ("value", "expected"),
    [
        ("tlsv1.1,tlsv1.2,bogus", (TlsVersion.TLSV1_1, TlsVersion.TLSV1_2)),
        (" tlsv1.2 , tlsv1 ", (TlsVersion.TLSV1_2, TlsVersion.TLSV1)),
        ("tlsv1.2,tlsv1.2", (TlsVersion.TLSV1_2,)),
        (["tlsv1", "nope"], (TlsVersion.TLSV1,)),
        ("", ()),
    ],
)
def test_allowed_tls_versions_keep_recognised_entries_in_order(value: object, expected: tuple[TlsVersion, ...]) -> None:
    config = resolve_smtp_config({**_BASE, "allowed_tls_versions": value}, environ={})

    assert config.tls_versions == expected


@pytest.mark.os_agnostic
@pytest.mark.parametrize(
    ("key", "value", "field", "expected"),
    [
        ("ssl", "true", "ssl", True),
        ("ssl", False, "ssl", False),
        ("no_mx_lookups", "false", "no_mx_lookups", False),
        ("retries", "4", "retries", 4),
        ("auth", "always", "auth", AuthMode.ALWAYS),
        ("tls", "always", "tls", TlsMode.ALWAYS),
        ("hostname", "client.test", "hostname", "client.test"),
    ],
)
def test_recognised_values_are_coerced(key: str, value: object, field: str, expected: object) -> None:
    config = resolve_smtp_config({**_BASE, key: value}, environ={})

    assert getattr(config, field) == expected


@pytest.mark.os_agnostic
@pytest.mark.parametrize(
    ("key", "value", "field"),
    [
        ("ssl", "yes", "ssl"),
        ("no_mx_lookups", 1, "no_mx_lookups"),
        ("auth", "never", "auth"),
        ("tls", "sometimes", "tls"),
        ("retries", "many", "retries"),
        ("hostname", 42, "hostname"),
    ],
)
def test_malformed_values_are_dropped_with_warning(
    key: str,
    value: object,
    field: str,
    caplog: pytest.LogCaptureFixture,
) -> None:
    with caplog.at_level(logging.WARNING, logger="smtp_adapter"):
        config = resolve_smtp_config({**_BASE, key: value}, environ={})

    assert getattr(config, field) is None
    assert any(getattr(record, "key", None) == key for record in caplog.records)


@pytest.mark.os_agnostic
def test_unparseable_port_is_dropped() -> None:
    config = resolve_smtp_config({"server": "mx", "port": "smtp"}, environ={})

    assert config.port is None


@pytest.mark.os_agnostic
def test_unknown_keys_are_dropped(caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level(logging.WARNING, logger="smtp_adapter"):
        config = resolve_smtp_config({**_BASE, "adapter": "Bamboo", "deliver_later": True}, environ={})

    assert "adapter" not in config.model_dump()
    assert {getattr(record, "key", None) for record in caplog.records} >= {"adapter", "deliver_later"}


@pytest.mark.os_agnostic
def test_warnings_never_contain_secret_values(caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level(logging.DEBUG, logger="smtp_adapter"):
        resolve_smtp_config({**_BASE, "password": 12345, "username": {"system": "U"}}, environ={"U": "user"})

    assert "12345" not in caplog.text


# ======================== Properties ========================


@pytest.mark.os_agnostic
@given(
    port=st.integers(min_value=1, max_value=65535),
    retries=st.integers(min_value=0, max_value=10),
    as_text=st.booleans(),
)
@settings(max_examples=50)
def test_resolution_is_deterministic(port: int, retries: int, as_text: bool) -> None:
    raw = {"server": "mx", "port": str(port) if as_text else port, "retries": retries}

    assert resolve_smtp_config(raw, environ={}) == resolve_smtp_config(raw, environ={})
    assert resolve_smtp_config(raw, environ={}).port == port


@pytest.mark.os_agnostic
@given(value=st.one_of(st.text(max_size=20), st.integers(), st.booleans(), st.none()))
@settings(max_examples=100)
def test_ssl_is_default_parsed_or_dropped(value: object) -> None:
    config = resolve_smtp_config({**_BASE, "ssl": value}, environ={})

    if value is None:
        assert config.ssl is False
    elif isinstance(value, bool):
        assert config.ssl is value
    elif value in ("true", "false"):
        assert config.ssl is (value == "true")
    else:
        assert config.ssl is None


# ======================== SmtpConfig ========================


@pytest.mark.os_agnostic
def test_repr_str_and_display_hide_the_password() -> None:
    config = SmtpConfig(relay="mx", port=25, password="hunter2")

    assert "hunter2" not in repr(config)
    assert "hunter2" not in str(config)
    assert "hunter2" not in f"{config}"
    assert "password='[REDACTED]'" in repr(config)
    assert config.to_display_dict()["password"] == "[REDACTED]"


@pytest.mark.os_agnostic
def test_smtp_config_is_frozen() -> None:
    config = SmtpConfig(relay="mx")

    with pytest.raises(Exception):  # noqa: B017 - pydantic raises ValidationError
        config.relay = "other"  # type: ignore[misc]


@pytest.mark.os_agnostic
def test_redact_leaves_other_keys_alone() -> None:
    assert redact({"server": "mx", "password": None}) == {"server": "mx", "password": None}
