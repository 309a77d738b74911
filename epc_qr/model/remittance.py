# RU: Информация о переводе (AT-05): структурированная ссылка ИЛИ свободный текст.
# EN: Remittance information (AT-05): structured reference OR unstructured text, never both.

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from epc_qr.exceptions import DuplicateRemittanceError

from .enums import RemittanceKind

logger = logging.getLogger(__name__)

__all__ = ["Remittance"]


@dataclass(frozen=True)
class Remittance:
    """
    Two-variant remittance value.

    - ``RemittanceKind.REFERENCE``: structured creditor reference (max. 35 characters)
    - ``RemittanceKind.TEXT``: unstructured text (max. 140 characters)

    Lengths are not checked here; see ``epc_qr.payload.validation``.
    """

    kind: RemittanceKind
    text: str

    @classmethod
    def reference(cls, reference: str) -> "Remittance":
        return cls(RemittanceKind.REFERENCE, reference)

    @classmethod
    def unstructured(cls, text: str) -> "Remittance":
        return cls(RemittanceKind.TEXT, text)

    @classmethod
    def from_inputs(
        cls, reference: Optional[str] = None, text: Optional[str] = None
    ) -> Optional["Remittance"]:
        """Build the value from two separate raw inputs.

        Raises:
            DuplicateRemittanceError: both a reference and a text were given.
        """
        if reference is not None and text is not None:
            logger.error("Both remittance reference and text supplied")
            raise DuplicateRemittanceError()
        if reference is not None:
            return cls.reference(reference)
        if text is not None:
            return cls.unstructured(text)
        return None

    @property
    def is_reference(self) -> bool:
        return self.kind is RemittanceKind.REFERENCE

    @property
    def max_length(self) -> int:
        return self.kind.max_length

    def __str__(self) -> str:
        return self.text
