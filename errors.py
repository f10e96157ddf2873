# errors.py
from __future__ import annotations


class EnigmaError(ValueError):
    """Root of every error the machine raises."""


class ConfigError(EnigmaError):
    """Bad alphabet, wiring, rotor arrangement or setting."""


class InvalidCharacter(EnigmaError):
    """A character the alphabet does not contain."""

    def __init__(self, ch: str, where: str = "alphabet") -> None:
        super().__init__(f"Character {ch!r} not in {where}")
        self.ch = ch


class RangeError(EnigmaError, IndexError):
    """An integer contact index outside 0..size-1."""

    def __init__(self, index: int, size: int) -> None:
        super().__init__(f"Index {index} out of range 0–{size - 1}")
        self.index = index
        self.size = size
