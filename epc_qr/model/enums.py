"""
model/enums.py

(Краткое RU: Перечисления для модели EPC QR-кода.)

EN: Domain enums for the EPC QR payload model and its renderers.
NO serialization logic here!

- Character sets declared by EPC069-12 (only UTF-8 is implemented).
- Remittance variants (structured reference / unstructured text).
- QR error-correction levels accepted by the renderer.
- Image formats accepted by the image encoder.

See Also:
    - EPC069-12 "Quick Response Code: Guidelines to Enable Data Capture
      for the Initiation of a SEPA Credit Transfer"
    - epc_qr/payload (for wire format logic)
"""

from __future__ import annotations

import logging
from enum import Enum, IntEnum
from pathlib import Path
from typing import Dict, Final, Literal, Union

from qrcode.constants import ERROR_CORRECT_H, ERROR_CORRECT_L, ERROR_CORRECT_M, ERROR_CORRECT_Q

_logger: Final[logging.Logger] = logging.getLogger(__name__)

__all__ = [
    "CharacterSet",
    "RemittanceKind",
    "ErrorCorrection",
    "ImageFormat",
]


class CharacterSet(IntEnum):
    """Character set codes of the EPC payload (line 3)."""

    UTF8 = 1
    ISO8859_1 = 2
    ISO8859_2 = 3
    ISO8859_4 = 4
    ISO8859_5 = 5
    ISO8859_7 = 6
    ISO8859_10 = 7
    ISO8859_15 = 8

    @property
    def is_supported(self) -> bool:
        return self is CharacterSet.UTF8

    @property
    def codec(self) -> str:
        mapping = {
            CharacterSet.UTF8: "utf-8",
            CharacterSet.ISO8859_1: "iso8859-1",
            CharacterSet.ISO8859_2: "iso8859-2",
            CharacterSet.ISO8859_4: "iso8859-4",
            CharacterSet.ISO8859_5: "iso8859-5",
            CharacterSet.ISO8859_7: "iso8859-7",
            CharacterSet.ISO8859_10: "iso8859-10",
            CharacterSet.ISO8859_15: "iso8859-15",
        }
        return mapping[self]


class RemittanceKind(str, Enum):
    REFERENCE = "reference"
    TEXT = "text"

    @property
    def max_length(self) -> int:
        return 35 if self is RemittanceKind.REFERENCE else 140

    def localized_name(self, lang: Literal["ru", "en"] = "en") -> str:
        names_ru = {
            RemittanceKind.REFERENCE: "Структурированная ссылка",
            RemittanceKind.TEXT: "Назначение платежа",
        }
        names_en = {
            RemittanceKind.REFERENCE: "Structured reference",
            RemittanceKind.TEXT: "Unstructured remittance",
        }
        return names_ru[self] if lang == "ru" else names_en[self]


class ErrorCorrection(str, Enum):
    L = "L"
    M = "M"
    Q = "Q"
    H = "H"

    @property
    def qrcode_constant(self) -> int:
        mapping = {
            ErrorCorrection.L: ERROR_CORRECT_L,
            ErrorCorrection.M: ERROR_CORRECT_M,
            ErrorCorrection.Q: ERROR_CORRECT_Q,
            ErrorCorrection.H: ERROR_CORRECT_H,
        }
        return mapping[self]

    @classmethod
    def parse(cls, value: Union[str, "ErrorCorrection"]) -> "ErrorCorrection":
        if isinstance(value, ErrorCorrection):
            return value
        try:
            return cls(str(value).strip().upper())
        except ValueError:
            _logger.error("Unknown error correction level: %r", value)
            raise ValueError(
                f"Unknown error correction level {value!r}, expected one of L, M, Q, H"
            ) from None


class ImageFormat(str, Enum):
    PNG = "png"
    JPEG = "jpeg"
    QOI = "qoi"

    @property
    def pil_format(self) -> str:
        """Format name understood by ``PIL.Image.Image.save``."""
        return self.name

    @property
    def extension(self) -> str:
        return ".jpg" if self is ImageFormat.JPEG else f".{self.value}"

    @classmethod
    def parse(cls, value: Union[str, "ImageFormat"]) -> "ImageFormat":
        if isinstance(value, ImageFormat):
            return value
        normalized = str(value).strip().lower().lstrip(".")
        if normalized == "jpg":
            normalized = "jpeg"
        try:
            return cls(normalized)
        except ValueError:
            _logger.error("Unknown image format: %r", value)
            raise ValueError(
                f"Unknown image format {value!r}, expected one of png, jpeg, qoi"
            ) from None

    @classmethod
    def from_path(cls, file_path: Union[str, Path]) -> "ImageFormat":
        """Infer the encoding from the file extension, PNG when unrecognised."""
        suffix = Path(file_path).suffix.lower()
        return _EXTENSION_MAP.get(suffix, cls.PNG)


_EXTENSION_MAP: Final[Dict[str, ImageFormat]] = {
    ".png": ImageFormat.PNG,
    ".jpg": ImageFormat.JPEG,
    ".jpeg": ImageFormat.JPEG,
    ".qoi": ImageFormat.QOI,
}
