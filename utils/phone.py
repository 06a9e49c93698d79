# utils/phone.py
from typing import Any, List

from storage.base import AnyOf, Predicate
from utils.coerce import canonical_text


class PhoneNumber:
    """A phone value that may have been stored as text or as a number.

    ``text`` keeps the form the client sent, which is what gets written.
    ``candidates()`` lists every representation a stored record might use,
    e.g. ``"0811111111"`` -> ``["0811111111", 811111111, "811111111"]``.
    """

    def __init__(self, raw: Any):
        self.raw = raw
        self.text = canonical_text(raw).strip()

    @property
    def is_numeric(self) -> bool:
        return self.text.isdigit()

    @property
    def number(self):
        return int(self.text) if self.is_numeric else None

    @property
    def key(self) -> str:
        """Canonical form: the digits with leading zeros dropped.

        ``"0811111111"``, ``811111111`` and ``"081-111-1111"`` share one key.
        """
        digits = "".join(c for c in self.text if c.isdigit())
        return str(int(digits)) if digits else self.text

    def candidates(self) -> List[Any]:
        values: List[Any] = [self.text]
        if self.is_numeric:
            for alt in (self.number, str(self.number)):
                if alt not in values:
                    values.append(alt)
        return values

    def __eq__(self, other):
        if not isinstance(other, PhoneNumber):
            other = PhoneNumber(other)
        return self.key == other.key

    def __hash__(self):
        return hash(self.key)

    def __str__(self):
        return self.text

    def __repr__(self):
        return f"PhoneNumber({self.raw!r})"


def normalize_match(phone: Any, field: str = "phone") -> Predicate:
    """Predicate matching ``field`` under any representation of ``phone``."""
    if not isinstance(phone, PhoneNumber):
        phone = PhoneNumber(phone)
    return {field: AnyOf(phone.candidates())}
