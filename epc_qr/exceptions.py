"""
Централизованные исключения генератора EPC QR-кодов.

Все ошибки ядра (модель, валидация, сериализация) и делегированных
компонентов (рендеринг QR, запись изображения) наследуют от EpcQrError.
Ошибки файлового ввода-вывода (OSError) не оборачиваются.

Example:
    >>> from epc_qr.exceptions import EpcQrError
    >>> try:
    ...     serialize(record)
    ... except EpcQrError as e:
    ...     logger.error("EPC payload rejected: %s", e)

Иерархия:
    EpcQrError (базовое)
    ├── InvalidEpcCodeError
    │   ├── InvalidFieldLengthError
    │   ├── DuplicateRemittanceError
    │   ├── PayloadTooLargeError
    │   └── UnsupportedCharacterSetError
    ├── AmountError
    │   ├── AmountNoSeparatorError
    │   ├── AmountParseError
    │   └── AmountOutOfRangeError
    └── GenerationError
        ├── QrRenderError
        └── ImageEncodeError
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Dict, Optional

if TYPE_CHECKING:
    from epc_qr.payload.validation import FieldViolations

__all__: list[str] = [
    "EpcQrError",
    "InvalidEpcCodeError",
    "InvalidFieldLengthError",
    "DuplicateRemittanceError",
    "PayloadTooLargeError",
    "UnsupportedCharacterSetError",
    "AmountError",
    "AmountNoSeparatorError",
    "AmountParseError",
    "AmountOutOfRangeError",
    "GenerationError",
    "QrRenderError",
    "ImageEncodeError",
]


# ==============================================================================
# BASE EXCEPTION
# ==============================================================================


class EpcQrError(Exception):
    """
    Базовое исключение для всех ошибок пакета.

    Attributes:
        message: Человекочитаемое сообщение об ошибке
        context: Дополнительный контекст для отладки (опционально)

    Example:
        >>> str(EpcQrError("Generation failed", context={"step": "render"}))
        'EpcQrError: Generation failed (step=render)'
    """

    def __init__(
        self,
        message: str,
        *,
        context: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.context = context or {}

    def __str__(self) -> str:
        parts = [self.__class__.__name__, ": ", self.message]

        if self.context:
            ctx_str = ", ".join(f"{k}={v}" for k, v in self.context.items())
            parts.append(f" ({ctx_str})")

        return "".join(parts)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(message={self.message!r}, context={self.context!r})"


# ==============================================================================
# PAYLOAD ERRORS
# ==============================================================================


class InvalidEpcCodeError(EpcQrError):
    """Данные платёжного поручения не могут быть закодированы."""


class InvalidFieldLengthError(InvalidEpcCodeError):
    """
    Одно или несколько полей нарушают ограничения длины.

    Всегда содержит полный набор нарушений, чтобы вызывающий код мог
    исправить все поля за один проход.

    Attributes:
        violations: FieldViolations со всеми флагами
    """

    def __init__(self, violations: FieldViolations) -> None:
        flagged = violations.flagged()
        super().__init__(
            "At least one field had an invalid length",
            context={"fields": ", ".join(flagged)},
        )
        self.violations = violations


class DuplicateRemittanceError(InvalidEpcCodeError):
    """Заданы одновременно структурированная ссылка и свободный текст."""

    def __init__(self) -> None:
        super().__init__("At most one remittance field (text/reference) may be specified!")


class PayloadTooLargeError(InvalidEpcCodeError):
    """
    Итоговый размер полезной нагрузки в байтах UTF-8 превышает лимит.

    Attributes:
        size: Фактический размер в байтах
        limit: Допустимый максимум
    """

    def __init__(self, size: int, limit: int) -> None:
        super().__init__(
            f"Total data is larger than the maximal allowed {limit} bytes!",
            context={"size": size},
        )
        self.size = size
        self.limit = limit


class UnsupportedCharacterSetError(InvalidEpcCodeError):
    """Кодировка из перечня EPC распознана, но не реализована."""

    def __init__(self, character_set: Any) -> None:
        name = getattr(character_set, "name", str(character_set))
        super().__init__(
            f"Character set {name} is not supported, only UTF8 is implemented",
            context={"character_set": name},
        )
        self.character_set = character_set


# ==============================================================================
# AMOUNT ERRORS
# ==============================================================================


class AmountError(EpcQrError, ValueError):
    """Базовая ошибка разбора суммы."""


class AmountNoSeparatorError(AmountError):
    """В строке суммы нет десятичного разделителя '.'."""

    def __init__(self, text: str) -> None:
        super().__init__(
            "Invalid format, expected #.##, but couldn't find '.'",
            context={"input": text},
        )


class AmountParseError(AmountError):
    """Целая или дробная часть не является неотрицательным целым числом."""

    def __init__(self, text: str, part: str) -> None:
        super().__init__(
            f"Failed to parse Amount: invalid digits in {part} part",
            context={"input": text},
        )
        self.part = part


class AmountOutOfRangeError(AmountError):
    """
    Сумма вне диапазона 0.01 .. 999999999.99.

    Attributes:
        euro: Целая часть (None, если не вычислялась)
        cent: Дробная часть в центах (None, если не вычислялась)
    """

    def __init__(
        self,
        euro: Optional[int] = None,
        cent: Optional[int] = None,
        *,
        amount_text: Optional[str] = None,
    ) -> None:
        shown = amount_text if amount_text is not None else f"{euro}.{cent:02}"
        if len(shown) > 24:
            shown = shown[:20] + "..."
        super().__init__(f"The amount must be between 0.01 and 999999999.99, but was {shown}")
        self.euro = euro
        self.cent = cent


# ==============================================================================
# GENERATION ERRORS
# ==============================================================================


class GenerationError(EpcQrError):
    """Ошибка делегированных этапов: QR-матрица или изображение."""


class QrRenderError(GenerationError):
    """Полезная нагрузка не помещается ни в одну версию QR для выбранного уровня коррекции."""


class ImageEncodeError(GenerationError):
    """Библиотека изображений не смогла закодировать матрицу в выбранный формат."""
