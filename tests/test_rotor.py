import pytest

from alphabet import Alphabet
from errors import ConfigError, RangeError
from permutation import Permutation
from rotor_and_reflector import (
    FixedRotor,
    MovingRotor,
    Reflector,
    RotorCatalog,
    RotorKind,
    make_rotor,
)

ROTOR_I = "(AELTPHQXRU) (BKNW) (CMOY) (DFG) (IV) (JZ) (S)"
REFLECTOR_B = "(AY) (BR) (CU) (DH) (EQ) (FS) (GL) (IP) (JX) (KN) (MO) (TZ) (VW)"


@pytest.fixture
def alpha():
    return Alphabet()


@pytest.fixture
def rotor_i(alpha):
    return MovingRotor("I", Permutation(ROTOR_I, alpha), "Q")


def test_capabilities(alpha, rotor_i):
    beta = FixedRotor("Beta", Permutation("(HIX)", alpha))
    refl = Reflector("B", Permutation(REFLECTOR_B, alpha))

    assert rotor_i.rotates() and not rotor_i.reflecting()
    assert not beta.rotates() and not beta.reflecting()
    assert not refl.rotates() and refl.reflecting()
    assert (rotor_i.kind, beta.kind, refl.kind) == (
        RotorKind.MOVING, RotorKind.FIXED, RotorKind.REFLECTOR)


def test_fixed_rotor_never_advances_or_notches(alpha):
    beta = FixedRotor("Beta", Permutation("(HIX)", alpha))
    beta.set("Q")
    beta.advance()
    assert beta.setting == 16
    assert not beta.at_notch()


def test_convert_at_zero_setting(alpha, rotor_i):
    assert rotor_i.convert_forward(alpha.to_index("A")) == alpha.to_index("E")
    assert rotor_i.convert_backward(alpha.to_index("E")) == alpha.to_index("A")


def test_convert_with_offset(alpha, rotor_i):
    # contact A at setting B enters the wiring at B, leaves at K, then shifts back to J
    rotor_i.set("B")
    assert rotor_i.convert_forward(alpha.to_index("A")) == alpha.to_index("J")
    assert rotor_i.convert_backward(alpha.to_index("J")) == alpha.to_index("A")


def test_backward_undoes_forward_at_every_setting(alpha, rotor_i):
    for s in range(alpha.size()):
        rotor_i.set(s)
        for p in range(alpha.size()):
            assert rotor_i.convert_backward(rotor_i.convert_forward(p)) == p


@pytest.mark.parametrize("bad", [-1, 26, 100])
def test_out_of_range_contact(rotor_i, bad):
    with pytest.raises(RangeError):
        rotor_i.convert_forward(bad)
    with pytest.raises(RangeError):
        rotor_i.convert_backward(bad)


def test_advance_wraps_and_notch_follows_window(rotor_i):
    rotor_i.set("P")
    assert not rotor_i.at_notch()
    rotor_i.advance()
    assert rotor_i.position() == "Q"
    assert rotor_i.at_notch()
    rotor_i.set("Z")
    rotor_i.advance()
    assert rotor_i.setting == 0


def test_ring_keeps_window_and_shifts_wiring(rotor_i):
    rotor_i.set("A")
    rotor_i.set_ring("B")
    assert rotor_i.ring_setting == 1
    assert rotor_i.setting == 25
    assert rotor_i.position() == "A"

    rotor_i.set("P")
    rotor_i.set_ring("C")
    assert rotor_i.position() == "P"
    assert not rotor_i.at_notch()
    rotor_i.advance()
    assert rotor_i.at_notch()


def test_bad_notch(alpha):
    with pytest.raises(ConfigError):
        MovingRotor("X", Permutation("", alpha), "a")


def test_reflector_must_be_an_involution_without_fixed_points(alpha):
    with pytest.raises(ConfigError):
        Reflector("half", Permutation("(AB)", alpha))
    with pytest.raises(ConfigError):
        Reflector("cycle", Permutation("(ABC)(DE)(FG)(HI)(JK)(LM)(NO)(PQ)(RS)(TU)(VW)(XYZ)", alpha))


def test_make_rotor_dispatches_on_kind(alpha):
    perm = Permutation(REFLECTOR_B, alpha)
    assert isinstance(make_rotor("I", RotorKind.MOVING, Permutation(ROTOR_I, alpha), "Q"), MovingRotor)
    assert isinstance(make_rotor("B", RotorKind.REFLECTOR, perm), Reflector)
    assert type(make_rotor("Beta", RotorKind.FIXED, perm)) is FixedRotor
    with pytest.raises(ConfigError):
        make_rotor("Beta", RotorKind.FIXED, perm, "A")


def test_kind_codes():
    assert RotorKind.from_code("m") is RotorKind.MOVING
    assert RotorKind.from_code("R") is RotorKind.REFLECTOR
    with pytest.raises(ConfigError):
        RotorKind.from_code("X")


def test_catalog_lookup(alpha, rotor_i):
    catalog = RotorCatalog([rotor_i])
    assert catalog.get("I") is rotor_i
    assert "I" in catalog and "II" not in catalog
    assert catalog.names() == ["I"]
    assert len(catalog) == 1
    with pytest.raises(ConfigError):
        catalog.get("II")
    with pytest.raises(ConfigError):
        catalog.add(MovingRotor("I", Permutation("", alpha), ""))
