"""Налаштування точності: значення за замовчуванням і об'єкт Precision."""
from __future__ import annotations

from dataclasses import dataclass
from decimal import (
    ROUND_05UP,
    ROUND_CEILING,
    ROUND_DOWN,
    ROUND_FLOOR,
    ROUND_HALF_DOWN,
    ROUND_HALF_EVEN,
    ROUND_HALF_UP,
    ROUND_UP,
)
from typing import Iterator, Union

from .errors import PrecisionContractError

DEFAULT_OOM: int = -3                    # округлення до тисячних
DEFAULT_ROUNDING: str = ROUND_HALF_UP
GUARD_DIGITS: int = 10                   # запасні знаки для проміжних ірраціональних значень

ROUNDING_RULES = frozenset({
    ROUND_05UP,
    ROUND_CEILING,
    ROUND_DOWN,
    ROUND_FLOOR,
    ROUND_HALF_DOWN,
    ROUND_HALF_EVEN,
    ROUND_HALF_UP,
    ROUND_UP,
})


def check_precision(oom: object, rm: object) -> None:
    """Порушення контракту точності — це помилка програміста, а не даних."""
    if oom is None or rm is None:
        raise PrecisionContractError("Both oom and rounding rule are required")
    if isinstance(oom, bool) or not isinstance(oom, int):
        raise PrecisionContractError(f"oom must be an int, got {oom!r}")
    if rm not in ROUNDING_RULES:
        raise PrecisionContractError(f"Unknown rounding rule: {rm!r}")


@dataclass(frozen=True)
class Precision:
    """
    Пара (oom, rm). Розпаковується як *precision, тож
    p.equals(q, *prec) те саме, що p.equals(q, prec.oom, prec.rm).
    """
    oom: int = DEFAULT_OOM
    rm: str = DEFAULT_ROUNDING

    def __post_init__(self) -> None:
        check_precision(self.oom, self.rm)

    def __iter__(self) -> Iterator[Union[int, str]]:
        yield self.oom; yield self.rm

    def finer(self, digits: int = GUARD_DIGITS) -> "Precision":
        """Та сама пара, але на digits десяткових знаків точніша."""
        return Precision(self.oom - digits, self.rm)


DEFAULT_PRECISION = Precision()
