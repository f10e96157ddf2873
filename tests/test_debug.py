import logging

import pytest

from debug import COMPONENTS, Debug
from permutation import Permutation


@pytest.fixture
def dbg():
    d = Debug()
    saved = d.status()
    yield d
    for name, on in saved.items():
        (d.enable if on else d.disable)(name)
    d.toggle_global(True)


def test_components_are_shared_between_instances(dbg):
    dbg.enable("stepping")
    assert Debug().status()["stepping"] is True
    dbg.disable("stepping")
    assert Debug().status()["stepping"] is False


def test_unknown_component(dbg):
    with pytest.raises(ValueError):
        dbg.enable("keyboard")


def test_stepping_is_logged_when_enabled(dbg, enigma_i, alpha, caplog):
    enigma_i.insert_rotors(["B", "I", "II", "III"])
    enigma_i.set_rotors("AAA")
    enigma_i.set_plugboard(Permutation("(AB)", alpha))
    dbg.enable(*COMPONENTS)
    with caplog.at_level(logging.DEBUG, logger="ENIGMA"):
        enigma_i.convert("A")
    assert "[STEPPING] window AAB moved [3]" in caplog.text
    assert "[PLUGBOARD] in 0 -> 1" in caplog.text
    assert "[ENCIPHER]" in caplog.text


def test_global_switch_silences_everything(dbg, enigma_i, caplog):
    enigma_i.insert_rotors(["B", "I", "II", "III"])
    enigma_i.set_rotors("AAA")
    dbg.enable(*COMPONENTS)
    dbg.toggle_global(False)
    with caplog.at_level(logging.DEBUG, logger="ENIGMA"):
        enigma_i.convert("A")
    assert caplog.text == ""
