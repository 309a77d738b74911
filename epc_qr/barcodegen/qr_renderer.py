"""
RU: Рендеринг полезной нагрузки EPC в матрицу QR-модулей (библиотека qrcode)
EN: Renders an EPC payload into a QR module matrix (qrcode library)

Provides:
- Byte-mode QR encoding with a configurable error-correction level
- Automatic version selection (or a fixed version)
- Quiet zone included in the returned matrix

Requirements: qrcode
"""

from __future__ import annotations

import logging
from typing import Final, List, Optional, Union

import qrcode
from qrcode.exceptions import DataOverflowError

from epc_qr.exceptions import QrRenderError
from epc_qr.model.enums import ErrorCorrection

logger = logging.getLogger(__name__)

__all__ = ["QrRenderer", "Matrix", "MAX_QR_VERSION"]

Matrix = List[List[bool]]

MAX_QR_VERSION: Final[int] = 40
DEFAULT_BORDER: Final[int] = 4


class QrRenderer:
    """QR matrix renderer.

    Args:
        error_correction: Error-correction level (EPC069-12 recommends M).
        version: Fixed symbol version 1..40, ``None`` for the smallest fitting one.
        border: Quiet zone width in modules.

    Examples:
        >>> matrix = QrRenderer().render_matrix(b"BCD\\n002\\n1\\nSCT")
        >>> len(matrix) == len(matrix[0])
        True
    """

    def __init__(
        self,
        error_correction: Union[ErrorCorrection, str] = ErrorCorrection.M,
        version: Optional[int] = None,
        border: int = DEFAULT_BORDER,
    ) -> None:
        if version is not None and not (1 <= version <= MAX_QR_VERSION):
            logger.error("QR version out of range: %r", version)
            raise ValueError(f"QR version must be between 1 and {MAX_QR_VERSION}, got {version}")
        if border < 0:
            raise ValueError(f"Border must not be negative, got {border}")
        self.error_correction = ErrorCorrection.parse(error_correction)
        self.version = version
        self.border = border

    def _build(self, payload: bytes) -> qrcode.QRCode:
        qr = qrcode.QRCode(
            version=self.version,
            error_correction=self.error_correction.qrcode_constant,
            border=self.border,
        )
        qr.add_data(payload)
        try:
            qr.make(fit=self.version is None)
        except DataOverflowError as e:
            logger.error(
                "Payload of %d bytes does not fit a QR code at level %s",
                len(payload),
                self.error_correction.value,
            )
            raise QrRenderError(
                "Data too long for any QR code version",
                context={"bytes": len(payload), "level": self.error_correction.value},
            ) from e
        return qr

    def render_matrix(self, payload: bytes) -> Matrix:
        """Encode ``payload`` and return rows of modules, ``True`` = dark.

        Raises:
            QrRenderError: the payload exceeds the symbol capacity.
        """
        if not payload:
            raise QrRenderError("Payload must not be empty")
        qr = self._build(payload)
        matrix = [[bool(module) for module in row] for row in qr.get_matrix()]
        logger.debug(
            "QR matrix rendered: version %s, %d modules per side", qr.version, len(matrix)
        )
        return matrix

    def symbol_version(self, payload: bytes) -> int:
        """Version the payload would be encoded with."""
        return int(self._build(payload).version)
