"""Email model handed to the adapter and the encoded result it produces."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field

from .addresses import Address, AddressInput, to_address, to_addresses


@dataclass(frozen=True, slots=True)
class Attachment:
    """File attached to a message.

    Text data is stored UTF-8 encoded.

    Example:
        >>> Attachment("f.txt", "hi").data
        b'hi'
    """

    filename: str
    data: bytes

    def __post_init__(self) -> None:
        if isinstance(self.data, str):
            object.__setattr__(self, "data", self.data.encode("utf-8"))


@dataclass(frozen=True, slots=True)
class EmailMessage:
    """Structured email ready to be encoded.

    The model does not enforce a sender or any recipient; that is the
    caller's responsibility.
    """

    subject: str = ""
    from_address: Address | None = None
    to: tuple[Address, ...] = ()
    cc: tuple[Address, ...] = ()
    bcc: tuple[Address, ...] = ()
    text_body: str | None = None
    html_body: str | None = None
    attachments: tuple[Attachment, ...] = field(default_factory=tuple)

    @classmethod
    def create(
        cls,
        *,
        subject: str | None = None,
        from_address: AddressInput | None = None,
        to: AddressInput | Iterable[AddressInput] | None = None,
        cc: AddressInput | Iterable[AddressInput] | None = None,
        bcc: AddressInput | Iterable[AddressInput] | None = None,
        text_body: str | None = None,
        html_body: str | None = None,
        attachments: Sequence[Attachment] | None = None,
    ) -> EmailMessage:
        """Build a message from loose inputs, normalising every address.

        Example:
            >>> email = EmailMessage.create(
            ...     from_address=("Ann", "ann@x.com"),
            ...     to=[(None, "a@x.com"), ("Bob", "b@x.com")],
            ... )
            >>> email.subject
            ''
            >>> [a.email for a in email.all_recipients()]
            ['a@x.com', 'b@x.com']
        """
        return cls(
            subject=subject or "",
            from_address=to_address(from_address) if from_address is not None else None,
            to=to_addresses(to),
            cc=to_addresses(cc),
            bcc=to_addresses(bcc),
            text_body=text_body,
            html_body=html_body,
            attachments=tuple(attachments or ()),
        )

    def all_recipients(self) -> tuple[Address, ...]:
        """Return ``to``, then ``cc``, then ``bcc``, duplicates kept."""
        return (*self.to, *self.cc, *self.bcc)


@dataclass(frozen=True, slots=True)
class EncodedMessage:
    """Wire-ready MIME document plus the SMTP envelope addresses."""

    envelope_from: str | None
    envelope_to: tuple[str, ...]
    body: bytes


__all__ = [
    "Attachment",
    "EmailMessage",
    "EncodedMessage",
]
