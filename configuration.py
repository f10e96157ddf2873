# configuration.py
from __future__ import annotations

import json
from pathlib import Path
from typing import Iterable, List, Tuple

from alphabet import Alphabet, DEFAULT_ALPHABET
from debug import Debug
from errors import ConfigError
from machine import Machine
from permutation import Permutation
from rotor_and_reflector import RotorCatalog, RotorKind, make_rotor
from utilities import standard_catalog

debug = Debug()
debug.disable("config")

WheelEntry = Tuple[str, RotorKind, str, str]   # (name, kind, cycles, notches)


# ────────────────────────────────────────────────────────────────────────
#  1. Machine description
# ────────────────────────────────────────────────────────────────────────


def build_machine(
    alphabet: Alphabet,
    num_rotors: int,
    num_pawls: int,
    wheels: Iterable[WheelEntry],
) -> Machine:
    catalog = RotorCatalog()
    for name, kind, cycles, notches in wheels:
        catalog.add(make_rotor(name, kind, Permutation(cycles, alphabet), notches))
    debug.log("config", f"{num_rotors} slots, {num_pawls} pawls, {catalog}")
    return Machine(alphabet, num_rotors, num_pawls, catalog)


def _parse_type(name: str, code: str) -> Tuple[RotorKind, str]:
    kind = RotorKind.from_code(code[0])
    notches = code[1:]
    if kind is not RotorKind.MOVING and notches:
        raise ConfigError(f"Rotor {name}: only moving rotors take notches, got {code!r}")
    return kind, notches


def parse_config(text: str) -> Machine:
    """Build a machine from the text format:

        ABCDEFGHIJKLMNOPQRSTUVWXYZ
        5 3
        I MQ (AELTPHQXRU) (BKNW) (CMOY) (DFG) (IV) (JZ) (S)
        ...

    Line one is the alphabet, then the slot and pawl counts, then one
    description per wheel: name, type (M<notches>, N or R) and cycles,
    which may continue on the following lines.
    """
    lines = text.splitlines()
    if not lines or not lines[0].strip():
        raise ConfigError("Configuration file is empty")
    alphabet = Alphabet(lines[0].strip())

    tokens = " ".join(lines[1:]).split()
    if len(tokens) < 2:
        raise ConfigError("Missing number of rotors and pawls")
    try:
        num_rotors, num_pawls = int(tokens[0]), int(tokens[1])
    except ValueError:
        raise ConfigError(f"Rotor and pawl counts must be integers, got {tokens[:2]}") from None
    if num_pawls >= num_rotors:
        raise ConfigError("Too many pawls")

    wheels: List[WheelEntry] = []
    pos = 2
    while pos < len(tokens):
        if pos + 1 >= len(tokens):
            raise ConfigError(f"Rotor description for {tokens[pos]} is truncated")
        name, code = tokens[pos], tokens[pos + 1]
        pos += 2
        kind, notches = _parse_type(name, code)
        cycles: List[str] = []
        while pos < len(tokens) and tokens[pos].startswith("("):
            cycles.append(tokens[pos])
            pos += 1
        wheels.append((name, kind, " ".join(cycles), notches))

    return build_machine(alphabet, num_rotors, num_pawls, wheels)


_JSON_KEYS = {"alphabet", "rotors", "pawls"}
_KIND_NAMES = {"moving": "M", "fixed": "N", "reflector": "R"}


def load_config(path: str | Path) -> Machine:
    """Build a machine from a JSON description. Without a "wheels" list
    the historical wheel set is used."""
    try:
        data = json.loads(Path(path).read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise ConfigError(f"{path}: not valid JSON ({exc})") from exc
    if not isinstance(data, dict):
        raise ConfigError(f"{path}: expected a JSON object")
    missing = _JSON_KEYS - data.keys()
    if missing:
        raise ConfigError(f"Missing keys in config: {', '.join(sorted(missing))}")

    alphabet = Alphabet(data["alphabet"])
    rotors, pawls = data["rotors"], data["pawls"]
    if not isinstance(rotors, int) or not isinstance(pawls, int):
        raise ConfigError("'rotors' and 'pawls' must be integers")

    if "wheels" not in data:
        if alphabet.chars != DEFAULT_ALPHABET:
            raise ConfigError("The standard wheels need the A–Z alphabet")
        return Machine(alphabet, rotors, pawls, standard_catalog(alphabet))

    wheels: List[WheelEntry] = []
    for entry in data["wheels"]:
        try:
            name, kind_text = entry["name"], entry["kind"]
        except (KeyError, TypeError):
            raise ConfigError(f"Wheel entry {entry!r} needs 'name' and 'kind'") from None
        code = _KIND_NAMES.get(str(kind_text).lower(), str(kind_text))
        kind = RotorKind.from_code(code)
        wheels.append((name, kind, entry.get("cycles", ""), entry.get("notches", "")))
    return build_machine(alphabet, rotors, pawls, wheels)


def read_config(path: str | Path) -> Machine:
    """Load PATH, choosing the JSON reader for *.json files."""
    path = Path(path)
    if path.suffix.lower() == ".json":
        return load_config(path)
    return parse_config(path.read_text(encoding="utf-8"))


# ────────────────────────────────────────────────────────────────────────
#  2. Settings line
# ────────────────────────────────────────────────────────────────────────


def setup(machine: Machine, settings: str) -> None:
    """Configure MACHINE from a line such as

        * B Beta III IV I AXLE [RINGS] (HQ) (EX) (IP) (TR) (BY)

    The machine only changes once the whole line has been checked.
    """
    parts = settings.split()
    if not parts or parts[0] != "*":
        raise ConfigError("Settings line must start with '*'")
    n = machine.num_rotors
    if len(parts) < n + 2:
        raise ConfigError(f"Settings line needs {n} rotor names and a setting")

    names = parts[1 : n + 1]
    position = parts[n + 1]
    rest = parts[n + 2 :]
    rings = None
    if rest and not rest[0].startswith("("):
        rings, rest = rest[0], rest[1:]
    plugboard = Permutation(" ".join(rest), machine.alphabet) if rest else None

    previous = machine.rotors
    machine.insert_rotors(names)
    try:
        machine.check_letters(position, "setting")
        if rings is not None:
            machine.check_letters(rings, "ring setting")
    except ConfigError:
        machine.rotors = previous
        raise

    machine.set_rotors(position)
    if rings is not None:
        machine.set_rings(rings)
    machine.set_plugboard(plugboard)
    debug.log("config", f"{machine} at {machine.window()}")
