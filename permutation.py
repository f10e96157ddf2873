# permutation.py
from __future__ import annotations

from typing import List, overload

from alphabet import Alphabet
from debug import Debug
from errors import ConfigError, InvalidCharacter

debug = Debug()
debug.disable("permutation")


def parse_cycles(cycles: str, alphabet: Alphabet) -> List[str]:
    """Split cycle notation "(abc) (de)" into ["abc", "de"].

    Whitespace is ignored. Every other character must sit inside exactly
    one pair of parentheses, belong to *alphabet* and appear only once in
    the whole text.
    """
    result: List[str] = []
    used: set[str] = set()
    current: List[str] | None = None

    for ch in cycles:
        if ch == "(":
            if current is not None:
                raise ConfigError(f"Nested '(' in cycles {cycles!r}")
            current = []
        elif ch == ")":
            if current is None:
                raise ConfigError(f"Unbalanced ')' in cycles {cycles!r}")
            if current:
                result.append("".join(current))
            current = None
        elif ch.isspace():
            continue
        else:
            if current is None:
                raise ConfigError(f"Character {ch!r} outside any cycle in {cycles!r}")
            if not alphabet.contains(ch):
                raise ConfigError(f"Character {ch!r} in cycles is not in the alphabet")
            if ch in used:
                raise ConfigError(f"Character {ch!r} repeated in cycles")
            used.add(ch)
            current.append(ch)

    if current is not None:
        raise ConfigError(f"Unclosed '(' in cycles {cycles!r}")
    return result


class Permutation:
    """A permutation of an alphabet's indices, given in cycle notation.

    Characters not mentioned in any cycle map to themselves.
    """

    def __init__(self, cycles: str, alphabet: Alphabet) -> None:
        self.alphabet = alphabet
        self.cycles: List[str] = parse_cycles(cycles, alphabet)

        # integer lookup tables
        n = alphabet.size()
        self._fwd = list(range(n))
        self._rev = list(range(n))
        for cycle in self.cycles:
            idx = [alphabet.to_index(c) for c in cycle]
            for a, b in zip(idx, idx[1:] + idx[:1]):
                self._fwd[a] = b
                self._rev[b] = a
        debug.log("permutation", f"{self} fwd={self._fwd}")

    def size(self) -> int:
        return self.alphabet.size()

    def wrap(self, p: int) -> int:
        """Return P modulo size(), never negative."""
        return p % self.size()

    @overload
    def permute(self, p: int) -> int: ...
    @overload
    def permute(self, p: str) -> str: ...

    def permute(self, p):
        """Successor of P in its cycle (P itself if in no cycle)."""
        if isinstance(p, str):
            return self.alphabet.to_char(self._fwd[self._index_of(p)])
        return self._fwd[self.wrap(p)]

    @overload
    def invert(self, c: int) -> int: ...
    @overload
    def invert(self, c: str) -> str: ...

    def invert(self, c):
        """Predecessor of C in its cycle (C itself if in no cycle)."""
        if isinstance(c, str):
            return self.alphabet.to_char(self._rev[self._index_of(c)])
        return self._rev[self.wrap(c)]

    def derangement(self) -> bool:
        """True iff no index maps to itself."""
        return all(self._fwd[i] != i for i in range(self.size()))

    def involution(self) -> bool:
        """True iff applying the permutation twice is the identity."""
        return all(self._fwd[self._fwd[i]] == i for i in range(self.size()))

    def _index_of(self, ch: str) -> int:
        if not self.alphabet.contains(ch):
            raise InvalidCharacter(ch, "permutation alphabet")
        return self.alphabet.to_index(ch)

    # nicety for debugging
    def __repr__(self) -> str:
        text = " ".join(f"({c})" for c in self.cycles)
        return f"<Permutation {text or 'identity'}>"
