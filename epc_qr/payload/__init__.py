"""
payload

Валидация и сериализация текста EPC QR-кода.

Public API:
    - collect_violations / validate: проверка всех полей с полным отчётом
    - serialize: байты полезной нагрузки (UTF-8, не более 331 байта)
    - serialize_text / payload_text: текстовое представление
"""

from epc_qr.payload.serializer import (
    MAX_PAYLOAD_BYTES,
    payload_lines,
    payload_text,
    serialize,
    serialize_text,
)
from epc_qr.payload.validation import FieldViolations, collect_violations, validate

__all__ = [
    "MAX_PAYLOAD_BYTES",
    "FieldViolations",
    "collect_violations",
    "validate",
    "payload_lines",
    "payload_text",
    "serialize",
    "serialize_text",
]
