"""Email addresses as a tagged variant plus envelope/header formatting.

An address is either bare (just the mailbox) or named (display name plus
mailbox). Envelope formatting always yields the bare mailbox; header
formatting RFC 2047 "B"-encodes the display name as UTF-8 Base64.
"""

from __future__ import annotations

import base64
from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True, slots=True)
class BareAddress:
    """Mailbox without a display name."""

    email: str


@dataclass(frozen=True, slots=True)
class NamedAddress:
    """Mailbox decorated with a display name."""

    display_name: str
    email: str


Address = BareAddress | NamedAddress
"""Either address variant."""

AddressInput = BareAddress | NamedAddress | str | tuple[Any, str]
"""Loose address shapes accepted by :func:`to_address`."""


def to_address(value: AddressInput) -> Address:
    """Normalise a loose address value into the tagged variant.

    Accepts an existing variant, a plain mailbox string, or a
    ``(display_name, email)`` pair. A ``None`` or empty display name
    produces a :class:`BareAddress`.

    Raises:
        TypeError: When the value has none of the accepted shapes.

    Example:
        >>> to_address("a@x.com")
        BareAddress(email='a@x.com')
        >>> to_address((None, "a@x.com"))
        BareAddress(email='a@x.com')
        >>> to_address(("Bob", "b@x.com"))
        NamedAddress(display_name='Bob', email='b@x.com')
    """
    if isinstance(value, (BareAddress, NamedAddress)):
        if isinstance(value, NamedAddress) and not value.display_name:
            return BareAddress(value.email)
        return value
    if isinstance(value, str):
        return BareAddress(value)
    if isinstance(value, tuple) and len(value) == 2:
        name, email = value
        if not name:
            return BareAddress(email)
        return NamedAddress(str(name), email)
    raise TypeError(f"Unsupported address value: {value!r}")


def to_addresses(values: AddressInput | Iterable[AddressInput] | None) -> tuple[Address, ...]:
    """Normalise a single address, a sequence of addresses, or ``None``.

    A top-level tuple is a sequence of addresses. A single named address
    is passed as a :class:`NamedAddress` or wrapped in a list.

    Example:
        >>> to_addresses(None)
        ()
        >>> to_addresses("a@x.com")
        (BareAddress(email='a@x.com'),)
        >>> len(to_addresses(["a@x.com", ("Bob", "b@x.com")]))
        2
        >>> to_addresses(("a@x.com", "b@x.com"))
        (BareAddress(email='a@x.com'), BareAddress(email='b@x.com'))
    """
    if values is None:
        return ()
    if isinstance(values, (str, BareAddress, NamedAddress)):
        return (to_address(values),)
    return tuple(to_address(value) for value in values)


def encode_display_name(name: str) -> str:
    """Wrap a display name as an RFC 2047 UTF-8 Base64 encoded word.

    Example:
        >>> encode_display_name("Bob")
        '=?UTF-8?B?Qm9i?='
    """
    encoded = base64.b64encode(name.encode("utf-8")).decode("ascii")
    return f"=?UTF-8?B?{encoded}?="


def format_envelope(address: Address) -> str:
    """Return the bare mailbox used in the SMTP envelope.

    Example:
        >>> format_envelope(NamedAddress("Bob", "b@x.com"))
        'b@x.com'
    """
    return address.email


def format_header(address: Address) -> str:
    """Return the address as it appears inside message headers.

    Example:
        >>> format_header(BareAddress("a@x.com"))
        'a@x.com'
        >>> format_header(NamedAddress("Bob", "b@x.com"))
        '=?UTF-8?B?Qm9i?= <b@x.com>'
    """
    if isinstance(address, NamedAddress):
        return f"{encode_display_name(address.display_name)} <{address.email}>"
    return address.email


__all__ = [
    "Address",
    "AddressInput",
    "BareAddress",
    "NamedAddress",
    "encode_display_name",
    "format_envelope",
    "format_header",
    "to_address",
    "to_addresses",
]
