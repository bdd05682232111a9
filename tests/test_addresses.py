"""Address normalisation and envelope/header formatting."""

from __future__ import annotations

import base64

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from smtp_adapter.domain.addresses import (
    BareAddress,
    NamedAddress,
    encode_display_name,
    format_envelope,
    format_header,
    to_address,
    to_addresses,
)

_local_part = st.from_regex(r"[a-z][a-z0-9_.]{0,20}", fullmatch=True)
_domain = st.from_regex(r"[a-z][a-z0-9]{0,10}\.[a-z]{2,4}", fullmatch=True)
_mailbox = st.builds(lambda local, domain: f"{local}@{domain}", _local_part, _domain)  # type: ignore[arg-type]
_display_name = st.text(min_size=1, max_size=40)

# ======================== Normalisation ========================


@pytest.mark.os_agnostic
@pytest.mark.parametrize(
    ("value", "expected"),
    [
        ("a@x.com", BareAddress("a@x.com")),
        ((None, "a@x.com"), BareAddress("a@x.com")),
        (("", "a@x.com"), BareAddress("a@x.com")),
        (("Bob", "b@x.com"), NamedAddress("Bob", "b@x.com")),
        (NamedAddress("", "c@x.com"), BareAddress("c@x.com")),
        (BareAddress("d@x.com"), BareAddress("d@x.com")),
    ],
)
def test_to_address_normalises_loose_shapes(value: object, expected: object) -> None:
    assert to_address(value) == expected  # type: ignore[arg-type]


@pytest.mark.os_agnostic
@pytest.mark.parametrize("value", [42, ("a", "b", "c"), ["Bob", "b@x.com"]])
def test_to_address_rejects_unknown_shapes(value: object) -> None:
    with pytest.raises(TypeError):
        to_address(value)  # type: ignore[arg-type]


@pytest.mark.os_agnostic
def test_to_addresses_accepts_single_value_and_lists() -> None:
    assert to_addresses(None) == ()
    assert to_addresses(NamedAddress("Bob", "b@x.com")) == (NamedAddress("Bob", "b@x.com"),)
    assert to_addresses([("Bob", "b@x.com")]) == (NamedAddress("Bob", "b@x.com"),)
    assert to_addresses(["a@x.com", ("Bob", "b@x.com")]) == (
        BareAddress("a@x.com"),
        NamedAddress("Bob", "b@x.com"),
    )


@pytest.mark.os_agnostic
def test_to_addresses_treats_a_tuple_as_several_recipients() -> None:
    assert to_addresses(("b@x.com", "c@x.com")) == (BareAddress("b@x.com"), BareAddress("c@x.com"))


# ======================== Formatting ========================


@pytest.mark.os_agnostic
def test_named_address_header_encodes_display_name() -> None:
    assert format_header(NamedAddress("Bob", "b@x.com")) == "=?UTF-8?B?Qm9i?= <b@x.com>"


@pytest.mark.os_agnostic
def test_bare_address_header_is_the_mailbox() -> None:
    assert format_header(BareAddress("a@x.com")) == "a@x.com"


@pytest.mark.os_agnostic
def test_non_ascii_display_name_is_utf8_base64() -> None:
    assert encode_display_name("Zoë") == "=?UTF-8?B?Wm/Dqw==?="


@pytest.mark.os_agnostic
@given(name=_display_name, mailbox=_mailbox)
@settings(max_examples=100)
def test_envelope_form_is_always_the_bare_mailbox(name: str, mailbox: str) -> None:
    """Display names never leak into the SMTP envelope."""
    assert format_envelope(NamedAddress(name, mailbox)) == mailbox
    assert format_envelope(BareAddress(mailbox)) == mailbox


@pytest.mark.os_agnostic
@given(name=_display_name)
@settings(max_examples=100)
def test_encoded_display_name_decodes_back_to_original(name: str) -> None:
    encoded = encode_display_name(name)

    assert encoded.startswith("=?UTF-8?B?")
    assert encoded.endswith("?=")
    payload = encoded[len("=?UTF-8?B?") : -len("?=")]
    assert base64.b64decode(payload).decode("utf-8") == name
