"""
validation.py: проверка длины полей платёжного поручения перед сериализацией.

Every rule is evaluated independently and all violations are reported
together. Lengths are counted in characters (code points); the byte limit of
the whole payload is enforced separately by the serializer.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, fields
from typing import List, Optional

from epc_qr.exceptions import InvalidFieldLengthError
from epc_qr.model.payment import PaymentRecord

logger = logging.getLogger(__name__)

__all__ = ["FieldViolations", "collect_violations", "validate"]

BIC_LENGTHS = (8, 11)
NAME_MAX = 70
IBAN_MAX = 34
PURPOSE_MAX = 4
INFO_MAX = 70


@dataclass(frozen=True)
class FieldViolations:
    """Per-field flags; ``True`` marks a violated rule."""

    invalid_bic: bool = False
    invalid_name: bool = False
    invalid_iban: bool = False
    invalid_amount: bool = False
    invalid_purpose: bool = False
    invalid_remittance: bool = False
    invalid_info: bool = False

    @property
    def ok(self) -> bool:
        return not self.flagged()

    def flagged(self) -> List[str]:
        return [f.name for f in fields(self) if getattr(self, f.name)]


def _length_outside(value: Optional[str], maximum: int) -> bool:
    return value is not None and not (1 <= len(value) <= maximum)


def collect_violations(record: PaymentRecord) -> FieldViolations:
    remittance = record.remittance
    return FieldViolations(
        invalid_bic=record.bic is not None and len(record.bic) not in BIC_LENGTHS,
        invalid_name=not (1 <= len(record.beneficiary_name) <= NAME_MAX),
        invalid_iban=not (1 <= len(record.beneficiary_account) <= IBAN_MAX),
        invalid_amount=record.amount is not None and not record.amount.is_in_range(),
        invalid_purpose=_length_outside(record.purpose, PURPOSE_MAX),
        invalid_remittance=remittance is not None
        and _length_outside(remittance.text, remittance.max_length),
        invalid_info=_length_outside(record.info, INFO_MAX),
    )


def validate(record: PaymentRecord) -> None:
    """Check every field of ``record``.

    Raises:
        InvalidFieldLengthError: carrying all violated flags at once.
    """
    violations = collect_violations(record)
    if not violations.ok:
        logger.warning("Payment record rejected: %s", ", ".join(violations.flagged()))
        raise InvalidFieldLengthError(violations)
