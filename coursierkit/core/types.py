"""Small value types shared across coursierkit."""

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class NonEmptyString:
    """
    A string that is guaranteed to contain something besides whitespace.

    Validation happens once, at construction time. The wrapped value is kept
    exactly as given (it is not stripped).

    Raises:
        ValueError: If the value is empty or whitespace-only

    Example:
        >>> NonEmptyString("3.7.17").value
        '3.7.17'
        >>> NonEmptyString("  ")
        Traceback (most recent call last):
        ...
        ValueError: Value must be a non-empty string
    """

    value: str

    def __post_init__(self):
        if not isinstance(self.value, str) or not self.value.strip():
            raise ValueError("Value must be a non-empty string")

    @classmethod
    def parse(cls, value: Optional[str]) -> Optional["NonEmptyString"]:
        """Wrap ``value``, returning None instead of raising for blank input."""
        if value is None or not value.strip():
            return None
        return cls(value)

    def __str__(self) -> str:
        return self.value
