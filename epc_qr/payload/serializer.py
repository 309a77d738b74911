"""
RU: Сериализация платёжного поручения в текст EPC QR-кода (EPC069-12)
EN: Serialization of a payment record into the EPC QR code text payload (EPC069-12)

Layout (one field per line, LF separated, no trailing LF):

     1  BCD                  service tag
     2  001 | 002            version (001 when a BIC is present)
     3  1                    character set (UTF-8)
     4  SCT                  identification (SEPA Credit Transfer)
     5  BIC                  may be empty
     6  beneficiary name
     7  beneficiary account (IBAN)
     8  EUR<amount>          optional
     9  purpose              optional
    10  remittance           optional, reference or text
    11  information          optional

Lines 8-11 are only written up to the last one that has a value; an absent
field before that point is written as an empty line.
"""

from __future__ import annotations

import logging
from typing import Final, List, Optional

from epc_qr.exceptions import PayloadTooLargeError, UnsupportedCharacterSetError
from epc_qr.model.payment import PaymentRecord

from .validation import validate

logger = logging.getLogger(__name__)

__all__ = [
    "MAX_PAYLOAD_BYTES",
    "SERVICE_TAG",
    "IDENTIFICATION",
    "payload_lines",
    "payload_text",
    "serialize",
    "serialize_text",
]

MAX_PAYLOAD_BYTES: Final[int] = 331
SERVICE_TAG: Final[str] = "BCD"
IDENTIFICATION: Final[str] = "SCT"
LINE_SEPARATOR: Final[str] = "\n"


def _trailing_fields(record: PaymentRecord) -> List[Optional[str]]:
    return [
        record.amount.format() if record.amount is not None else None,
        record.purpose,
        record.remittance.text if record.remittance is not None else None,
        record.info,
    ]


def payload_lines(record: PaymentRecord) -> List[str]:
    lines = [
        SERVICE_TAG,
        record.version,
        str(int(record.character_set)),
        IDENTIFICATION,
        record.bic or "",
        record.beneficiary_name,
        record.beneficiary_account,
    ]

    trailing = _trailing_fields(record)
    present = [i for i, value in enumerate(trailing) if value is not None]
    if present:
        last = present[-1]
        lines.extend(value or "" for value in trailing[: last + 1])
    return lines


def payload_text(record: PaymentRecord) -> str:
    """Render the payload text without validating the record."""
    return LINE_SEPARATOR.join(payload_lines(record))


def serialize(record: PaymentRecord) -> bytes:
    """Validate ``record`` and return the encoded payload.

    Raises:
        InvalidFieldLengthError: a field violates its length rule.
        UnsupportedCharacterSetError: character set other than UTF-8.
        PayloadTooLargeError: more than ``MAX_PAYLOAD_BYTES`` bytes.
    """
    validate(record)

    if not record.character_set.is_supported:
        logger.error("Unsupported character set %s", record.character_set.name)
        raise UnsupportedCharacterSetError(record.character_set)

    lines = payload_lines(record)
    data = LINE_SEPARATOR.join(lines).encode(record.character_set.codec)
    logger.debug("EPC payload: %d lines, %d bytes", len(lines), len(data))

    if len(data) > MAX_PAYLOAD_BYTES:
        logger.warning("EPC payload too large: %d > %d bytes", len(data), MAX_PAYLOAD_BYTES)
        raise PayloadTooLargeError(len(data), MAX_PAYLOAD_BYTES)
    return data


def serialize_text(record: PaymentRecord) -> str:
    """Validated payload as text."""
    return serialize(record).decode("utf-8")
