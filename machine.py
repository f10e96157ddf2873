# machine.py  ─────────────────────────────────────────────────────────
from __future__ import annotations

from typing import List, Sequence

from alphabet import Alphabet
from debug import Debug
from errors import ConfigError, InvalidCharacter, RangeError
from permutation import Permutation
from rotor_and_reflector import Rotor, RotorCatalog

debug = Debug()
debug.disable("stepping")
debug.disable("encipher")
debug.disable("plugboard")


class StepContext:
    """Bookkeeping for a single key-press: which slots have advanced.

    A fresh context is made for every stepping pass and dropped after it,
    so no rotor can advance twice in one key-press and nothing carries
    over to the next one.
    """

    def __init__(self, rotors: Sequence[Rotor]) -> None:
        self.rotors = rotors
        self.advanced: set[int] = set()

    def have_rotated(self, slot: int) -> bool:
        return slot in self.advanced

    def advance(self, slot: int) -> None:
        if slot in self.advanced:
            return
        rotor = self.rotors[slot]
        if rotor.rotates():
            rotor.advance()
            self.advanced.add(slot)


class Machine:
    """A rotor machine with NUM_ROTORS slots, the rightmost NUM_PAWLS of
    which hold moving rotors. Slot 0 is the reflector and slot
    NUM_ROTORS-1 the fast rotor. CATALOG holds every rotor on offer."""

    def __init__(
        self,
        alphabet: Alphabet,
        num_rotors: int,
        num_pawls: int,
        catalog: RotorCatalog,
    ) -> None:
        if num_rotors <= 1:
            raise ConfigError("A machine needs at least two rotor slots")
        if not (0 <= num_pawls < num_rotors):
            raise ConfigError(f"Need 0 <= pawls < {num_rotors}, got {num_pawls}")
        for rotor in catalog:
            if rotor.alphabet != alphabet:
                raise ConfigError(f"Rotor {rotor.name} uses a different alphabet")

        self.alphabet = alphabet
        self.num_rotors = num_rotors
        self.num_pawls = num_pawls
        self.catalog = catalog
        self.rotors: List[Rotor] = []
        self.plugboard: Permutation | None = None

    def get_rotor(self, k: int) -> Rotor:
        """Rotor in slot K; slot 0 is the reflector."""
        return self.rotors[k]

    # ── configuration ───────────────────────────────────────────

    def insert_rotors(self, names: Sequence[str]) -> None:
        """Fill my slots with the catalog rotors NAMES, reflector first.

        Everything is checked before any slot is touched, so a failure
        leaves the previous arrangement in place.
        """
        if len(names) != self.num_rotors:
            raise ConfigError(f"{self.num_rotors} slots can't hold {len(names)} rotors")
        if len(set(names)) != len(names):
            dup = next(n for n in names if list(names).count(n) > 1)
            raise ConfigError(f"Rotor {dup} is used twice")

        chosen = [self.catalog.get(name) for name in names]
        first_moving = self.num_rotors - self.num_pawls

        if not chosen[0].reflecting():
            raise ConfigError(f"Leftmost rotor {chosen[0].name} must be a reflector")
        for i, rotor in enumerate(chosen[1:], start=1):
            if rotor.reflecting():
                raise ConfigError(f"Reflector {rotor.name} is only allowed in the first slot")
            if rotor.rotates() and i < first_moving:
                raise ConfigError(f"Moving rotor {rotor.name} in slot {i} has no pawl")
        moving = sum(1 for r in chosen if r.rotates())
        if moving != self.num_pawls:
            raise ConfigError(f"{moving} moving rotors for {self.num_pawls} pawls")

        self.rotors = chosen
        debug.log("config", f"rotors {[r.name for r in chosen]}")

    def set_rotors(self, setting: str) -> None:
        """Turn every rotor but the reflector to the letters of SETTING,
        leftmost first. Ring settings go back to A; apply set_rings()
        afterwards to change them."""
        letters = self.check_letters(setting, "setting")
        for rotor, letter in zip(self.rotors[1:], letters):
            rotor.ring_setting = 0
            rotor.set(letter)

    def set_rings(self, rings: str) -> None:
        """Apply ring-stellung RINGS to every rotor but the reflector.
        Call after set_rotors()."""
        letters = self.check_letters(rings, "ring setting")
        for rotor, letter in zip(self.rotors[1:], letters):
            rotor.set_ring(letter)

    def set_plugboard(self, plugboard: Permutation | None) -> None:
        """Replace the plugboard; None means no plugboard."""
        if plugboard is not None and plugboard.alphabet != self.alphabet:
            raise ConfigError("Plugboard uses a different alphabet")
        self.plugboard = plugboard
        debug.log("config", f"plugboard {plugboard}")

    def window(self) -> str:
        """Letters showing in the windows, leftmost moving rotor first."""
        return "".join(r.position() for r in self.rotors[1:])

    def check_letters(self, text: str, what: str) -> str:
        self._require_rotors()
        need = self.num_rotors - 1
        if len(text) != need:
            raise ConfigError(f"{what.capitalize()} {text!r} must be {need} characters")
        for ch in text:
            if not self.alphabet.contains(ch):
                raise ConfigError(f"{ch!r} in {what} {text!r} is not in the alphabet")
        return text

    def _require_rotors(self) -> None:
        if not self.rotors:
            raise ConfigError("No rotors inserted")

    # ── stepping logic  ─────────────────────────────────────────

    def _step_rotors(self) -> None:
        """Advance rotors for one key-press, double-step included.

        Notch states are read before anything moves. The fast rotor always
        steps and carries its left neighbour when at its notch; any other
        rotor at its notch steps together with its left neighbour.
        """
        rotors = self.rotors
        last = len(rotors) - 1
        notched = [r.at_notch() for r in rotors]
        ctx = StepContext(rotors)

        for i in range(1, last + 1):
            left = rotors[i - 1]
            if i == last:
                if notched[i] and left.rotates():
                    ctx.advance(i - 1)
                ctx.advance(i)
            elif notched[i] and left.rotates():
                ctx.advance(i)
                ctx.advance(i - 1)

        debug.log("stepping", f"window {self.window()} moved {sorted(ctx.advanced)}")

    # ── encipher one symbol  ────────────────────────────────────

    def convert_index(self, c: int) -> int:
        """Encipher the signal C after first advancing the machine."""
        self._require_rotors()
        if not (0 <= c < self.alphabet.size()):
            raise RangeError(c, self.alphabet.size())
        self._step_rotors()

        signal = c
        if self.plugboard is not None:
            signal = self.plugboard.permute(signal)
            debug.log("plugboard", f"in {c} -> {signal}")

        for rotor in reversed(self.rotors[1:]):
            signal = rotor.convert_forward(signal)

        for rotor in self.rotors:
            signal = rotor.convert_backward(signal)

        if self.plugboard is not None:
            out = self.plugboard.invert(signal)
            debug.log("plugboard", f"out {signal} -> {out}")
            signal = out

        debug.log("encipher", f"{c} -> {signal}")
        return signal

    def convert(self, msg: str) -> str:
        """Encipher MSG one character at a time. Spaces pass through
        untouched and do not step the rotors."""
        out: List[str] = []
        for ch in msg:
            if ch == " ":
                out.append(ch)
                continue
            if not self.alphabet.contains(ch):
                raise InvalidCharacter(ch)
            out.append(self.alphabet.to_char(self.convert_index(self.alphabet.to_index(ch))))
        return "".join(out)

    def __repr__(self) -> str:
        names = " ".join(r.name for r in self.rotors) or "empty"
        return f"<Machine {self.num_rotors}/{self.num_pawls} {names}>"
