"""
model

Доменная модель EPC QR-кода: сумма, информация о переводе, платёжное поручение, перечисления.

Public API:
    - Amount: сумма в евро (parse/format)
    - Remittance: ссылка или свободный текст (взаимоисключающие)
    - PaymentRecord: неизменяемое платёжное поручение
    - CharacterSet, RemittanceKind, ErrorCorrection, ImageFormat: перечисления
"""

from epc_qr.model.amount import Amount
from epc_qr.model.enums import CharacterSet, ErrorCorrection, ImageFormat, RemittanceKind
from epc_qr.model.payment import PaymentRecord
from epc_qr.model.remittance import Remittance

__all__ = [
    "Amount",
    "CharacterSet",
    "ErrorCorrection",
    "ImageFormat",
    "PaymentRecord",
    "Remittance",
    "RemittanceKind",
]
