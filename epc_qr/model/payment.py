# RU: Платёжное поручение SEPA Credit Transfer для EPC QR-кода, неизменяемое, собирается цепочкой with_*.
# EN: SEPA Credit Transfer record for the EPC QR payload, immutable, assembled via chained with_* calls.

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any, Dict, Optional

from .amount import Amount
from .enums import CharacterSet
from .remittance import Remittance

__all__ = ["PaymentRecord"]


@dataclass(frozen=True)
class PaymentRecord:
    """
    Data of one EPC QR code.

    Fields (EPC069-12 attribute numbers in brackets):
        character_set: Payload encoding, only UTF-8 is implemented.
        bic: [AT-23] BIC of the beneficiary bank (8/11 characters).
            Mandatory in version 001, optional in 002 inside the EEA.
        beneficiary_name: [AT-21] Name of the beneficiary (max. 70 characters).
        beneficiary_account: [AT-20] IBAN of the beneficiary (max. 34 characters).
        amount: [AT-04] Amount in Euro.
        purpose: [AT-44] Purpose of the credit transfer (max. 4 characters).
        remittance: [AT-05] Remittance information, reference or text.
        info: Beneficiary to originator information (max. 70 characters).

    Nothing is validated at construction time.

    Example:
        >>> record = (
        ...     PaymentRecord.new("Jane Doe", "DE02120300000000202051")
        ...     .with_bic("BYLADEM1001")
        ...     .with_amount(Amount.parse("10.00"))
        ... )
        >>> record.version
        '001'
    """

    beneficiary_name: str
    beneficiary_account: str
    bic: Optional[str] = None
    amount: Optional[Amount] = None
    purpose: Optional[str] = None
    remittance: Optional[Remittance] = None
    info: Optional[str] = None
    character_set: CharacterSet = CharacterSet.UTF8

    @classmethod
    def new(cls, beneficiary_name: str, beneficiary_account: str) -> "PaymentRecord":
        return cls(beneficiary_name=beneficiary_name, beneficiary_account=beneficiary_account)

    def with_bic(self, bic: Optional[str]) -> "PaymentRecord":
        return replace(self, bic=bic)

    def with_amount(self, amount: Optional[Amount]) -> "PaymentRecord":
        return replace(self, amount=amount)

    def with_purpose(self, purpose: Optional[str]) -> "PaymentRecord":
        return replace(self, purpose=purpose)

    def with_remittance(self, remittance: Optional[Remittance]) -> "PaymentRecord":
        return replace(self, remittance=remittance)

    def with_info(self, info: Optional[str]) -> "PaymentRecord":
        return replace(self, info=info)

    def with_character_set(self, character_set: CharacterSet) -> "PaymentRecord":
        return replace(self, character_set=character_set)

    @property
    def version(self) -> str:
        """Protocol version tag: ``001`` with BIC, ``002`` without."""
        return "001" if self.bic is not None else "002"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "character_set": self.character_set.name,
            "bic": self.bic,
            "beneficiary_name": self.beneficiary_name,
            "beneficiary_account": self.beneficiary_account,
            "amount": self.amount.format() if self.amount is not None else None,
            "purpose": self.purpose,
            "remittance_kind": self.remittance.kind.value if self.remittance else None,
            "remittance": self.remittance.text if self.remittance else None,
            "info": self.info,
        }

    def __str__(self) -> str:
        account = self.beneficiary_account
        shown = account[:4] + "..." + account[-4:] if len(account) > 12 else account
        return f"PaymentRecord({self.beneficiary_name!r}, account={shown}, v{self.version})"
