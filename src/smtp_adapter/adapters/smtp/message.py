"""Encode an :class:`EmailMessage` into an RFC 2822 MIME document.

The builder produces three things per delivery: the bare envelope sender,
the bare envelope recipients (``to`` then ``cc`` then ``bcc``), and the
rendered multipart message as CRLF-terminated bytes. Header addresses keep
their display names, RFC 2047 encoded; ``Bcc`` recipients only reach the
envelope and are never rendered into the document.
"""

from __future__ import annotations

import logging
import mimetypes
from collections.abc import Sequence
from email import encoders
from email.mime.base import MIMEBase
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText
from email.policy import compat32
from email.utils import formatdate
from typing import Final

from smtp_adapter.domain.addresses import Address, format_envelope, format_header
from smtp_adapter.domain.message import Attachment, EmailMessage, EncodedMessage

logger = logging.getLogger(__name__)

_FALLBACK_CONTENT_TYPE: Final[str] = "application/octet-stream"

#: Header policy for the wire document: legacy folding keeps pre-encoded
#: display names byte-for-byte, CRLF line endings per RFC 2822.
WIRE_POLICY: Final = compat32.clone(linesep="\r\n")


def format_address_list(addresses: Sequence[Address]) -> str:
    """Join addresses in header form.

    Example:
        >>> from smtp_adapter.domain.addresses import BareAddress, NamedAddress
        >>> format_address_list([BareAddress("a@x.com"), NamedAddress("Bob", "b@x.com")])
        'a@x.com, =?UTF-8?B?Qm9i?= <b@x.com>'
    """
    return ", ".join(format_header(address) for address in addresses)


def _body_part(text_body: str | None, html_body: str | None) -> MIMEBase | None:
    """Return the text, HTML, or alternative part for the non-empty bodies."""
    parts: list[MIMEBase] = []
    if text_body:
        parts.append(MIMEText(text_body, "plain", "utf-8"))
    if html_body:
        parts.append(MIMEText(html_body, "html", "utf-8"))
    if not parts:
        return None
    if len(parts) == 1:
        return parts[0]
    alternative = MIMEMultipart("alternative")
    for part in parts:
        alternative.attach(part)
    return alternative


def _attachment_part(attachment: Attachment) -> MIMEBase:
    content_type, _encoding = mimetypes.guess_type(attachment.filename)
    maintype, subtype = (content_type or _FALLBACK_CONTENT_TYPE).split("/", 1)
    part = MIMEBase(maintype, subtype)
    part.set_payload(attachment.data)
    encoders.encode_base64(part)
    filename: str | tuple[str, str, str] = attachment.filename
    if not attachment.filename.isascii():
        filename = ("utf-8", "", attachment.filename)
    part.add_header("Content-Disposition", "attachment", filename=filename)
    return part


def build_mime(email: EmailMessage) -> MIMEMultipart:
    """Assemble the multipart document for ``email`` without rendering it.

    Example:
        >>> from smtp_adapter.domain.message import EmailMessage
        >>> mime = build_mime(EmailMessage.create(subject="Hi", from_address="a@x.com", text_body="Hello"))
        >>> mime["Subject"], mime["From"]
        ('Hi', 'a@x.com')
    """
    message = MIMEMultipart("mixed")
    message["Subject"] = email.subject or ""
    if email.from_address is not None:
        message["From"] = format_header(email.from_address)
    if email.cc:
        message["Cc"] = format_address_list(email.cc)
    if email.to:
        message["To"] = format_address_list(email.to)
    message["Date"] = formatdate(localtime=True)

    body = _body_part(email.text_body, email.html_body)
    if body is not None:
        message.attach(body)
    for attachment in email.attachments:
        message.attach(_attachment_part(attachment))
    return message


def build_message(email: EmailMessage) -> EncodedMessage:
    """Encode ``email`` into envelope addresses and wire-ready bytes.

    Args:
        email: Message model; no sender or recipient checks are performed.

    Returns:
        Envelope sender (``None`` when the model has no sender), envelope
        recipients in ``to``/``cc``/``bcc`` order without de-duplication, and
        the rendered MIME document.

    Example:
        >>> from smtp_adapter.domain.message import EmailMessage
        >>> encoded = build_message(
        ...     EmailMessage.create(from_address=("Ann", "ann@x.com"), to="a@x.com", bcc="c@x.com", text_body="hi")
        ... )
        >>> encoded.envelope_from, encoded.envelope_to
        ('ann@x.com', ('a@x.com', 'c@x.com'))
        >>> b"Bcc:" in encoded.body
        False
    """
    mime = build_mime(email)
    envelope_from = format_envelope(email.from_address) if email.from_address is not None else None
    envelope_to = tuple(format_envelope(address) for address in email.all_recipients())
    body = mime.as_bytes(policy=WIRE_POLICY)
    logger.debug(
        "Encoded email message",
        extra={
            "recipient_count": len(envelope_to),
            "attachment_count": len(email.attachments),
            "size_bytes": len(body),
        },
    )
    return EncodedMessage(envelope_from=envelope_from, envelope_to=envelope_to, body=body)


__all__ = [
    "WIRE_POLICY",
    "build_message",
    "build_mime",
    "format_address_list",
]
