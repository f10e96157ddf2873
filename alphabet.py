# alphabet.py
from __future__ import annotations

from debug import Debug
from errors import ConfigError, InvalidCharacter, RangeError

debug = Debug()
debug.disable("alphabet")

RESERVED = frozenset("*()")
DEFAULT_ALPHABET = "ABCDEFGHIJKLMNOPQRSTUVWXYZ"


class Alphabet:
    """Ordered set of encodable characters; the K-th character has index K."""

    def __init__(self, chars: str = DEFAULT_ALPHABET) -> None:
        seen: set[str] = set()
        for ch in chars:
            if ch in RESERVED:
                raise ConfigError(f"{ch!r} is reserved and cannot be in an alphabet")
            if ch.isspace():
                raise ConfigError("No whitespace allowed in an alphabet")
            if ch in seen:
                raise ConfigError(f"Character {ch!r} duplicated in alphabet")
            seen.add(ch)

        self.chars: str = chars
        self.char_to_index: dict[str, int] = {
            ch: i for i, ch in enumerate(chars)
        }
        debug.log("alphabet", f"built {len(chars)} symbols: {chars}")

    def size(self) -> int:
        return len(self.chars)

    def contains(self, ch: str) -> bool:
        return ch in self.char_to_index

    # integer signal → letter
    def to_char(self, index: int) -> str:
        if not (0 <= index < len(self.chars)):
            raise RangeError(index, len(self.chars))
        return self.chars[index]

    # letter → integer signal
    def to_index(self, ch: str) -> int:
        try:
            return self.char_to_index[ch]
        except KeyError:
            raise InvalidCharacter(ch) from None

    # ── niceties --------------------------------------------------
    __len__ = size
    __contains__ = contains

    def __eq__(self, other: object) -> bool:
        return isinstance(other, Alphabet) and other.chars == self.chars

    def __hash__(self) -> int:
        return hash(self.chars)

    def __repr__(self) -> str:
        return f"<Alphabet {self.chars!r}>"
