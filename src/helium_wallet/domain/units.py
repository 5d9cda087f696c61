"""HNT amounts and their integer base unit ("bones")."""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from typing import Final, cast

from .errors import ValidationError

HNT_DECIMALS: Final[int] = 8
BONES_PER_HNT: Final[int] = 10**HNT_DECIMALS
MAX_BONES: Final[int] = 2**64 - 1
_MAX_BONES_DIGITS: Final[int] = len(str(MAX_BONES))


@dataclass(frozen=True)
class Hnt:
    """An exact HNT amount stored as an unsigned 64-bit count of bones.

    Conversion in either direction never rounds: text with more than eight
    fractional digits, negative values and values outside the u64 range are
    rejected instead of truncated.
    """

    bones: int

    def __post_init__(self) -> None:
        if isinstance(self.bones, bool) or not isinstance(self.bones, int):
            raise ValidationError(f"Bones must be an integer, got {self.bones!r}")
        if self.bones < 0 or self.bones > MAX_BONES:
            raise ValidationError(
                f"Amount {self.bones} bones is outside the range 0..{MAX_BONES}"
            )

    @classmethod
    def from_bones(cls, bones: int) -> "Hnt":
        return cls(bones)

    @classmethod
    def parse(cls, text: str) -> "Hnt":
        """Parse a human HNT amount such as ``"1.5"`` or ``"0.00000001"``."""
        raw = text.strip()
        try:
            value = Decimal(raw)
        except InvalidOperation as e:
            raise ValidationError(f"Invalid HNT amount: {text!r}") from e
        if not value.is_finite():
            raise ValidationError(f"Invalid HNT amount: {text!r}")
        if value < 0:
            raise ValidationError(f"HNT amount must not be negative: {text!r}")

        _, digits, exponent = value.as_tuple()
        exponent = cast(int, exponent)
        if exponent < -HNT_DECIMALS:
            raise ValidationError(
                f"HNT amount {text!r} has more than {HNT_DECIMALS} decimal places"
            )
        coefficient = int("".join(str(d) for d in digits) or "0")
        if coefficient == 0:
            return cls(0)
        # Bounded before scaling so huge exponents fail fast.
        if value.adjusted() + HNT_DECIMALS >= _MAX_BONES_DIGITS:
            raise ValidationError(f"HNT amount {text!r} is too large")
        return cls(coefficient * 10 ** (exponent + HNT_DECIMALS))

    def to_bones(self) -> int:
        return self.bones

    def to_decimal(self) -> Decimal:
        whole, frac = divmod(self.bones, BONES_PER_HNT)
        return Decimal(f"{whole}.{frac:0{HNT_DECIMALS}d}")

    def __str__(self) -> str:
        whole, frac = divmod(self.bones, BONES_PER_HNT)
        return f"{whole}.{frac:0{HNT_DECIMALS}d}"
