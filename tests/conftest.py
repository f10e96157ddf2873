import pytest

from alphabet import Alphabet
from machine import Machine
from utilities import standard_catalog


@pytest.fixture
def alpha():
    return Alphabet()


@pytest.fixture
def catalog(alpha):
    return standard_catalog(alpha)


@pytest.fixture
def enigma_i(alpha, catalog):
    """Reflector plus three moving rotors, as on the Wehrmacht Enigma I."""
    return Machine(alpha, 4, 3, catalog)


@pytest.fixture
def m4(alpha, catalog):
    """Thin reflector, a fixed Greek wheel and three moving rotors."""
    return Machine(alpha, 5, 3, catalog)
