# rotor_and_reflector.py
from __future__ import annotations

from enum import Enum
from typing import Dict, Iterator, List

from alphabet import Alphabet
from debug import Debug
from errors import ConfigError, RangeError
from permutation import Permutation

debug = Debug()
debug.disable("rotor")


class RotorKind(Enum):
    MOVING = "M"
    FIXED = "N"
    REFLECTOR = "R"

    @classmethod
    def from_code(cls, code: str) -> "RotorKind":
        try:
            return cls(code.upper())
        except ValueError:
            raise ConfigError(f"Unknown rotor type {code!r}; expected M, N or R") from None


class Rotor:
    """A wheel whose wiring is PERM in its 0 setting.

    The plain Rotor neither moves nor reflects; the three variants below
    are the only kinds a machine accepts.
    """

    kind: RotorKind = RotorKind.FIXED

    def __init__(self, name: str, perm: Permutation) -> None:
        self.name = name
        self.permutation = perm
        self.setting = 0
        self.ring_setting = 0

    @property
    def alphabet(self) -> Alphabet:
        return self.permutation.alphabet

    def size(self) -> int:
        return self.permutation.size()

    # ── capabilities ---------------------------------------------
    def rotates(self) -> bool:
        return False

    def reflecting(self) -> bool:
        return False

    def at_notch(self) -> bool:
        """True iff I let the rotor on my left advance."""
        return False

    def advance(self) -> None:
        """Step one position, if I can. By default does nothing."""

    # ── position & ring helpers ----------------------------------
    def set(self, posn: int | str) -> "Rotor":
        if isinstance(posn, str):
            posn = self.alphabet.to_index(posn)
        self.setting = self.permutation.wrap(posn)
        return self

    def set_ring(self, ring: str) -> "Rotor":
        """Turn the alphabet ring to RING, keeping the visible letter.

        Must follow set(): the wiring offset is re-based by the ring.
        """
        self.ring_setting = self.alphabet.to_index(ring)
        self.set(self.setting - self.ring_setting)
        return self

    def position(self) -> str:
        """Letter showing in the window."""
        return self.alphabet.to_char(self.permutation.wrap(self.setting + self.ring_setting))

    # ── signal paths ---------------------------------------------
    def convert_forward(self, p: int) -> int:
        self._check(p)
        contact = self.permutation.wrap(p + self.setting)
        return self.permutation.wrap(self.permutation.permute(contact) - self.setting)

    def convert_backward(self, e: int) -> int:
        self._check(e)
        contact = self.permutation.wrap(e + self.setting)
        return self.permutation.wrap(self.permutation.invert(contact) - self.setting)

    def _check(self, p: int) -> None:
        if not (0 <= p < self.size()):
            raise RangeError(p, self.size())

    # ── niceties --------------------------------------------------
    def __repr__(self) -> str:
        return (f"<{type(self).__name__} {self.name} "
                f"pos={self.setting} ring={self.ring_setting}>")


class MovingRotor(Rotor):
    """A rotor with a ratchet; NOTCHES are the window letters at which it
    carries its left neighbour along."""

    kind = RotorKind.MOVING

    def __init__(self, name: str, perm: Permutation, notches: str) -> None:
        super().__init__(name, perm)
        for ch in notches:
            if not self.alphabet.contains(ch):
                raise ConfigError(f"Notch {ch!r} of rotor {name} is not in the alphabet")
        self.notches = frozenset(notches)

    def rotates(self) -> bool:
        return True

    def at_notch(self) -> bool:
        return self.position() in self.notches

    def advance(self) -> None:
        self.set(self.setting + 1)
        debug.log("rotor", f"{self.name} -> {self.setting}")


class FixedRotor(Rotor):
    """A rotor that never moves and does not reflect (e.g. Beta, Gamma)."""

    kind = RotorKind.FIXED


class Reflector(FixedRotor):
    """Leftmost, fixed wheel that sends the signal back through the stack."""

    kind = RotorKind.REFLECTOR

    def __init__(self, name: str, perm: Permutation) -> None:
        # ensure involution property and no self-maps
        if not perm.derangement() or not perm.involution():
            raise ConfigError(
                f"Reflector {name} wiring must be an involution with no fixed points"
            )
        super().__init__(name, perm)

    def reflecting(self) -> bool:
        return True


def make_rotor(
    name: str,
    kind: RotorKind,
    perm: Permutation,
    notches: str = "",
) -> Rotor:
    """Build the rotor variant that KIND names."""
    if kind is RotorKind.MOVING:
        return MovingRotor(name, perm, notches)
    if notches:
        raise ConfigError(f"Only moving rotors take notches ({name} is {kind.name})")
    if kind is RotorKind.REFLECTOR:
        return Reflector(name, perm)
    return FixedRotor(name, perm)


# ── catalog ───────────────────────────────────────────────────────
class RotorCatalog:
    """Every rotor available to a machine, in insertion order, by name."""

    def __init__(self, rotors: List[Rotor] | None = None) -> None:
        self._by_name: Dict[str, Rotor] = {}
        for rotor in rotors or ():
            self.add(rotor)

    def add(self, rotor: Rotor) -> None:
        if rotor.name in self._by_name:
            raise ConfigError(f"Rotor {rotor.name} defined twice")
        self._by_name[rotor.name] = rotor

    def get(self, name: str) -> Rotor:
        try:
            return self._by_name[name]
        except KeyError:
            raise ConfigError(f"Rotor {name} not found in catalog") from None

    def names(self) -> List[str]:
        return list(self._by_name)

    def __contains__(self, name: object) -> bool:
        return name in self._by_name

    def __iter__(self) -> Iterator[Rotor]:
        return iter(self._by_name.values())

    def __len__(self) -> int:
        return len(self._by_name)

    def __repr__(self) -> str:
        return f"<RotorCatalog {' '.join(self._by_name)}>"
