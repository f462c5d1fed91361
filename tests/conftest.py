"""
reclist Test Configuration
==========================

Shared fixtures: sample reclist documents and helpers.
"""

import io

import pytest

from reclist import Record


# ═══════════════════════════════════════════════════════════════════════════════
# SAMPLE DOCUMENTS
# ═══════════════════════════════════════════════════════════════════════════════

SOLAR_SYSTEM = """\
# Solar system objects
@star=Sun
	radius:	109.3
	mass:	333000
	gravity: 27.94
	descrip: "The Sun is the star at the center
		of the Solar System. It is a nearly
		perfect sphere of hot plasma. It is
		by far the most important source of
		energy for life on Earth."

@planet=Jupiter
	radius:	10.97
	mass:	317.83
	gravity: 2.528
	descrip: "Jupiter is the fifth planet from
		the Sun and the largest in the Solar
		System. It is a giant planet with a
		mass one-thousandth of the Sun, but
		two-and-a-half times that of all other
		planets in the Solar System combined."
	moons:	Ganymede Callisto Io Europa

@planet=Mars
	radius: 0.5320
	mass:	0.107
	gravity: 0.38
	descrip: "Mars is the fourth planet from the Sun
		and the second-smallest planet in the
		Solar System after Mercury. Mars is often
		referred as the \\"Red Planet\\" because
		the iron oxide prevalent on its	surface
		gives it a reddish appearance that is
		disctintive among the astronomical bodies
		visible to the naked eye."

@moon=Titan
	radius:	0.4043
	mass:	0.0225
	gravity: 0.14
	parent: Saturn

@dwarf=Eris
	radius:	0.1825
	mass:	0.0028
	gravity: 0.0672
	family:	SDO
"""

# Larger catalogue: (id, type, parent) for every record, in file order
CATALOGUE_INDEX = [
    ("Sun", "star", ""),
    ("Jupiter", "planet", ""),
    ("Saturn", "planet", ""),
    ("Neptune", "planet", ""),
    ("Earth", "planet", ""),
    ("Venus", "planet", ""),
    ("Ganymede", "moon", "Jupiter"),
    ("Titan", "moon", "Saturn"),
    ("Moon", "moon", "Earth"),
    ("Triton", "moon", "Neptune"),
    ("Eris", "dwarf", ""),
    ("Pluto", "dwarf", ""),
]

CATALOGUE = """
# Solar system objects
@star=Sun
	radius:	109.3
	mass:	333000
	gravity: 27.94
	descrip: "The Sun is the star at the center
		of the Solar System."

@planet=Jupiter
	radius:	10.97
	mass:	317.83
	descrip: "Jupiter is the fifth planet from
		the Sun and the largest in the Solar
		System."
	moons:	Ganymede Callisto Io Europa

@planet=Saturn
	radius:	9.140
	mass:	95.162
	descrip: "Saturn is the sixth planet from the
		Sun. The planet's most famous feature
		is its prominent ring system."
	moons:	Titan Rhea Iapetus Dione Tethys Enceladus Mimas Hyperion Phoebe

@planet=Neptune
	radius: 3.865
	descrip: "Neptune is the only planet in the Solar System found by
		mathematical prediction rather than by
		empirical observation."
	moons:	Triton Proteus Nereid

@planet=Earth
	radius: 1
	mass: 1
	gravity: 1
	descrip: "Earth is the third planet from the Sun

		and the only object in the Universe known
		to harbor life."
	moons:	Moon

@planet=Venus
	radius: 0.9499
	descrip: "Venus is the second planet from the Sun.
		It has the longest rotation period (243
		days) of any planet in the Solar System."

@moon=Ganymede
	radius: 0.4135
	parent:	Jupiter

@moon=Titan
	radius:	0.4043
	parent: Saturn

@moon=Moon
	radius: 0.2727
	parent: Earth

@moon=Triton
	radius: 0.2124
	parent:	Neptune

@dwarf=Eris
	radius:	0.1825
	family:	SDO
	moons:	Dysnomia

@dwarf=Pluto
	radius:	0.186
	family: Plutino
	moons:	Charon
"""


# ═══════════════════════════════════════════════════════════════════════════════
# FIXTURES
# ═══════════════════════════════════════════════════════════════════════════════

@pytest.fixture
def solar_system_text() -> str:
    """The five-record solar system sample."""
    return SOLAR_SYSTEM


@pytest.fixture
def catalogue_text() -> str:
    """The larger twelve-record catalogue."""
    return CATALOGUE


@pytest.fixture
def catalogue_index() -> list:
    """(id, type, parent) of every catalogue record, in file order."""
    return CATALOGUE_INDEX


@pytest.fixture
def mars() -> Record:
    """A planet record with single-line and multi-line values."""
    rec = Record("planet", "Mars")
    rec.set("radius", "0.5320")
    rec.set("mass", "0.107")
    rec.set("moons", "Phobos Deimos")
    rec.set("descrip", 'Often called the "Red Planet".\nIts surface is rusty.')
    return rec


class FailingSink(io.StringIO):
    """Text sink whose writes always fail."""

    def __init__(self):
        super().__init__()
        self.write_calls = 0

    def write(self, s):
        self.write_calls += 1
        raise OSError("disk full")


class FailingStream(io.RawIOBase):
    """Binary stream that yields some data, then fails."""

    def __init__(self, data: bytes):
        self._data = data
        self._sent = False

    def readable(self):
        return True

    def read(self, size=-1):
        if not self._sent:
            self._sent = True
            return self._data
        raise OSError("device unplugged")


@pytest.fixture
def failing_sink() -> FailingSink:
    return FailingSink()


@pytest.fixture
def failing_stream():
    """Factory for binary streams that fail after returning some data."""
    return FailingStream
