# utilities.py
from __future__ import annotations

import re
from typing import List, Tuple

from alphabet import Alphabet, DEFAULT_ALPHABET
from errors import InvalidCharacter
from permutation import Permutation
from rotor_and_reflector import RotorCatalog, RotorKind, make_rotor

# ────────────────────────────────────────────────────────────────────────
#  0. Regex & trivial helpers
# ────────────────────────────────────────────────────────────────────────

_num_re = re.compile(r"^([A-Za-z]+)(\d+)$")
_roman = {"I": 1, "II": 2, "III": 3, "IV": 4, "V": 5, "VI": 6, "VII": 7, "VIII": 8}


def _nat_key(name: str):
    """Natural‑sort rotor names so I, II, III, …, VIII, Beta, R1, R2, R10, …"""
    if name in _roman:
        return (0, "", _roman[name])
    m = _num_re.match(name)
    if m:
        prefix, num = m.groups()
        return (1, prefix, int(num))
    return (2, name, 0)


def sorted_names(names) -> List[str]:
    return sorted(names, key=_nat_key)


# ────────────────────────────────────────────────────────────────────────
#  1. Text helpers
# ────────────────────────────────────────────────────────────────────────


def check_message(msg: str, alphabet: Alphabet) -> str:
    """Return *msg* unchanged if every symbol is in the alphabet or is
    whitespace; raise InvalidCharacter otherwise."""
    for ch in msg:
        if not ch.isspace() and not alphabet.contains(ch):
            raise InvalidCharacter(ch)
    return msg


def strip_whitespace(msg: str) -> str:
    return "".join(msg.split())


def format_blocks(msg: str, block: int = 5) -> str:
    """Drop whitespace and print in groups of *block* (the last group may
    be shorter)."""
    if block <= 0:
        raise ValueError(f"Block size must be positive, got {block}")
    text = strip_whitespace(msg)
    return " ".join(text[i : i + block] for i in range(0, len(text), block))


# ────────────────────────────────────────────────────────────────────────
#  2. Wheel database
# ────────────────────────────────────────────────────────────────────────

# (name, kind, cycles, notches) -- wirings of the service machines
STANDARD_WHEELS: List[Tuple[str, RotorKind, str, str]] = [
    ("I",    RotorKind.MOVING, "(AELTPHQXRU) (BKNW) (CMOY) (DFG) (IV) (JZ) (S)", "Q"),
    ("II",   RotorKind.MOVING, "(FIXVYOMW) (CDKLHUP) (ESZ) (BJ) (GR) (NT) (A) (Q)", "E"),
    ("III",  RotorKind.MOVING, "(ABDHPEJT) (CFLVMZOYQIRWUKXSG) (N)", "V"),
    ("IV",   RotorKind.MOVING, "(AEPLIYWCOXMRFZBSTGJQNH) (DV) (KU)", "J"),
    ("V",    RotorKind.MOVING, "(AVOLDRWFIUQ) (BZKSMNHYC) (EGTJPX)", "Z"),
    ("VI",   RotorKind.MOVING, "(AJQDVLEOZWIYTS) (CGMNHFUX) (BPRK)", "ZM"),
    ("VII",  RotorKind.MOVING, "(ANOUPFRIMBZTLWKSVEGCJYDHXQ)", "ZM"),
    ("VIII", RotorKind.MOVING, "(AFLSETWUNDHOZVICQ) (BKJ) (GXY) (MPR)", "ZM"),
    ("Beta",  RotorKind.FIXED, "(ALBEVFCYODJWUGNMQTZSKPR) (HIX)", ""),
    ("Gamma", RotorKind.FIXED, "(AFNIRLBSQWVXGUZDKMTPCOYJHE)", ""),
    ("B", RotorKind.REFLECTOR,
     "(AY) (BR) (CU) (DH) (EQ) (FS) (GL) (IP) (JX) (KN) (MO) (TZ) (VW)", ""),
    ("C", RotorKind.REFLECTOR,
     "(AF) (BV) (CP) (DJ) (EI) (GO) (HY) (KR) (LZ) (MX) (NW) (QT) (SU)", ""),
    ("B-thin", RotorKind.REFLECTOR,
     "(AE) (BN) (CK) (DQ) (FU) (GY) (HW) (IJ) (LO) (MP) (RX) (SZ) (TV)", ""),
    ("C-thin", RotorKind.REFLECTOR,
     "(AR) (BD) (CO) (EJ) (FN) (GT) (HK) (IV) (LM) (PW) (QZ) (SX) (UY)", ""),
]


def standard_catalog(alphabet: Alphabet | None = None) -> RotorCatalog:
    """Fresh rotor objects for the historical wheels (A–Z alphabet)."""
    alphabet = alphabet or Alphabet(DEFAULT_ALPHABET)
    catalog = RotorCatalog()
    for name, kind, cycles, notches in STANDARD_WHEELS:
        catalog.add(make_rotor(name, kind, Permutation(cycles, alphabet), notches))
    return catalog


def describe_catalog(catalog: RotorCatalog) -> List[str]:
    """One line per wheel in the text configuration format."""
    lines: List[str] = []
    for name in sorted_names(catalog.names()):
        rotor = catalog.get(name)
        code = rotor.kind.value
        if rotor.rotates():
            code += "".join(sorted(rotor.notches))
        cycles = " ".join(f"({c})" for c in rotor.permutation.cycles)
        lines.append(f"{name} {code} {cycles}")
    return lines


__all__ = [
    "STANDARD_WHEELS",
    "standard_catalog",
    "describe_catalog",
    "check_message",
    "format_blocks",
    "sorted_names",
]
