# RU: Денежная сумма EPC (AT-04) в евро: разбор "D.DD"/"D.D" и форматирование "EUR…".
# EN: EPC amount value (AT-04): parsing of "D.DD"/"D.D" strings and "EUR…" formatting.

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Final, Union

from epc_qr.exceptions import AmountNoSeparatorError, AmountOutOfRangeError, AmountParseError

logger = logging.getLogger(__name__)

__all__ = ["Amount", "MAX_EURO", "MAX_CENT"]

MAX_EURO: Final[int] = 999_999_999
MAX_CENT: Final[int] = 99

_DIGITS = re.compile(r"[0-9]+")


@dataclass(frozen=True)
class Amount:
    """
    Amount in Euro, between 0.01 and 999999999.99 inclusive.

    ``decimals`` remembers how many fractional digits the value was written
    with: ``Amount.parse("12.5")`` and ``Amount.parse("12.50")`` hold the same
    cents but format as ``EUR12.5`` and ``EUR12.50`` respectively.

    Programmatic construction does not check the range; the payload validator
    reports out-of-range amounts together with every other field.

    Examples:
        >>> Amount.parse("12.5").format()
        'EUR12.5'
        >>> Amount(euro=3, cent=7).format()
        'EUR3.07'
    """

    euro: int
    cent: int
    decimals: int = 2

    @classmethod
    def parse(cls, text: str) -> "Amount":
        """Parse ``<euro>.<cent>`` with one or two fractional digits.

        Raises:
            AmountNoSeparatorError: no '.' in the input.
            AmountParseError: a side is empty or not made of ASCII digits.
            AmountOutOfRangeError: zero, too large, or more than two decimals.
        """
        euro_text, sep, cent_text = text.partition(".")
        if not sep:
            logger.error("Amount without separator: %r", text)
            raise AmountNoSeparatorError(text)
        if not _DIGITS.fullmatch(euro_text):
            logger.error("Invalid euro part in amount %r", text)
            raise AmountParseError(text, "euro")
        if not _DIGITS.fullmatch(cent_text):
            logger.error("Invalid cent part in amount %r", text)
            raise AmountParseError(text, "cent")

        # длина проверяется до int(): у int(str) есть предел числа цифр
        decimals = len(cent_text)
        if decimals > 2 or len(euro_text.lstrip("0")) > len(str(MAX_EURO)):
            logger.error("Amount out of range: %r", text)
            raise AmountOutOfRangeError(amount_text=text)

        euro = int(euro_text.lstrip("0") or "0")
        # одна цифра после точки означает десятки центов
        cent = int(cent_text) * 10 if decimals == 1 else int(cent_text)

        amount = cls(euro=euro, cent=cent, decimals=decimals)
        if not amount.is_in_range():
            logger.error("Amount out of range: %r", text)
            raise AmountOutOfRangeError(euro, cent)
        return amount

    @classmethod
    def from_decimal(cls, value: Union[Decimal, int, str]) -> "Amount":
        """Build a checked amount from a decimal quantity, rounded to cents."""
        try:
            number = Decimal(value)
        except InvalidOperation as e:
            raise AmountParseError(str(value), "euro") from e
        if not number.is_finite() or number.is_signed():
            raise AmountParseError(str(value), "euro")
        if number > MAX_EURO + 1:
            raise AmountOutOfRangeError(amount_text=str(value))

        quantized = number.quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)
        total_cents = int(quantized * 100)
        euro, cent = divmod(total_cents, 100)
        amount = cls(euro=euro, cent=cent)
        if not amount.is_in_range():
            raise AmountOutOfRangeError(euro, cent)
        return amount

    def is_in_range(self) -> bool:
        if self.euro < 0 or self.cent < 0:
            return False
        if self.euro > MAX_EURO or self.cent > MAX_CENT:
            return False
        return not (self.euro == 0 and self.cent == 0)

    def to_decimal(self) -> Decimal:
        return Decimal(self.euro) + Decimal(self.cent) / 100

    def format(self) -> str:
        """Render as the payload's amount line, e.g. ``EUR12.50``."""
        if self.decimals == 1 and self.cent % 10 == 0:
            return f"EUR{self.euro}.{self.cent // 10}"
        return f"EUR{self.euro}.{self.cent:02}"

    def __str__(self) -> str:
        return self.format()
