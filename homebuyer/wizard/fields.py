"""Editable numeric text buffers used by the wizard steps."""

from dataclasses import dataclass
from enum import Enum

DIGIT_CHARS = "0123456789"


class CharFilter(Enum):
    """Which characters a field accepts."""
    DECIMAL = "decimal"  # Digits and "."
    SIGNED_DECIMAL = "signed_decimal"  # Digits, "." and a leading "-"
    DIGITS = "digits"  # Loan term

    def accepts(self, text: str, char: str) -> bool:
        if char in DIGIT_CHARS:
            return True
        if self is CharFilter.DIGITS:
            return False
        if char == ".":
            return True
        return self is CharFilter.SIGNED_DECIMAL and char == "-" and text == ""


@dataclass
class Field:
    text: str = ""
    char_filter: CharFilter = CharFilter.DECIMAL

    def enter(self, char: str) -> bool:
        """Append char if the filter allows it. Returns whether it was taken."""
        if len(char) != 1 or not self.char_filter.accepts(self.text, char):
            return False
        self.text += char
        return True

    def erase(self) -> None:
        self.text = self.text[:-1]

    def set(self, text: str) -> None:
        """Replace the content, keeping only characters the filter accepts."""
        self.text = ""
        for char in text:
            self.enter(char)

    @property
    def is_valid(self) -> bool:
        return self.text != ""


@dataclass
class DualModeField:
    """A percentage field and an amount field; only the active one is edited."""
    percent: Field
    amount: Field
    use_percent: bool = True

    @property
    def active(self) -> Field:
        return self.percent if self.use_percent else self.amount

    def toggle(self) -> None:
        self.use_percent = not self.use_percent

    def enter(self, char: str) -> bool:
        return self.active.enter(char)

    def erase(self) -> None:
        self.active.erase()

    def set(self, text: str) -> None:
        self.active.set(text)

    @property
    def text(self) -> str:
        return self.active.text

    @property
    def is_valid(self) -> bool:
        return self.active.is_valid
