"""Domain enum tests: member values, string equality, and member counts."""

from __future__ import annotations

import pytest

from smtp_adapter.domain.enums import AuthMode, DeliveryErrorKind, OutputFormat, TlsMode, TlsVersion

# ======================== TlsMode ========================


@pytest.mark.os_agnostic
@pytest.mark.parametrize(
    ("member", "expected_value"),
    [
        (TlsMode.IF_AVAILABLE, "if_available"),
        (TlsMode.ALWAYS, "always"),
        (TlsMode.NEVER, "never"),
    ],
)
def test_tls_mode_member_values(member: TlsMode, expected_value: str) -> None:
    """Each TlsMode member carries the configuration text it is parsed from."""
    assert member.value == expected_value
    assert TlsMode(expected_value) is member


@pytest.mark.os_agnostic
def test_tls_mode_member_count() -> None:
    assert len(TlsMode) == 3


# ======================== AuthMode ========================


@pytest.mark.os_agnostic
def test_auth_mode_has_only_if_available_and_always() -> None:
    assert [member.value for member in AuthMode] == ["if_available", "always"]


@pytest.mark.os_agnostic
def test_auth_mode_rejects_never() -> None:
    """``never`` is a TLS policy, not an auth policy."""
    with pytest.raises(ValueError):
        AuthMode("never")


# ======================== TlsVersion ========================


@pytest.mark.os_agnostic
@pytest.mark.parametrize(
    ("member", "expected_value"),
    [
        (TlsVersion.TLSV1, "tlsv1"),
        (TlsVersion.TLSV1_1, "tlsv1.1"),
        (TlsVersion.TLSV1_2, "tlsv1.2"),
    ],
)
def test_tls_version_member_values(member: TlsVersion, expected_value: str) -> None:
    assert member == expected_value


# ======================== OutputFormat ========================


@pytest.mark.os_agnostic
@pytest.mark.parametrize(
    ("member", "expected_str"),
    [
        (OutputFormat.HUMAN, "human"),
        (OutputFormat.JSON, "json"),
    ],
)
def test_output_format_string_equality(member: OutputFormat, expected_str: str) -> None:
    """OutputFormat members compare equal to their plain string equivalents."""
    assert member == expected_str


# ======================== DeliveryErrorKind ========================


@pytest.mark.os_agnostic
def test_delivery_error_kind_member_count() -> None:
    assert {member.value for member in DeliveryErrorKind} == {"missing_credentials", "transport_rejected"}
