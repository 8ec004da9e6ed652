"""Star and body naming."""
from __future__ import annotations

import string
from typing import Set

from starforge.engine.rng import SeededRandom

_PREFIXES = [
    "Ald", "Bel", "Cor", "Den", "Eri", "Fom", "Gal", "Hyd", "Ith",
    "Jov", "Kep", "Lyr", "Mir", "Neb", "Ori", "Pol", "Qua", "Rig",
    "Sol", "Tau", "Ult", "Veg", "Wol", "Xen", "Ygg", "Zan",
]

_SUFFIXES = [
    "aris", "eon", "ix", "us", "ara", "ion", "ax", "is", "or",
    "ium", "oth", "ael", "ine", "ova", "ux", "enn", "ark", "os",
]

_DESIGNATIONS = [
    "Alpha", "Beta", "Gamma", "Delta", "Epsilon", "Zeta", "Eta",
    "Theta", "Iota", "Kappa", "Lambda", "Mu", "Nu", "Xi", "Omicron",
    "Pi", "Rho", "Sigma", "Tau", "Upsilon", "Phi", "Chi", "Psi", "Omega",
]

_ROMAN = (
    (1000, "M"), (900, "CM"), (500, "D"), (400, "CD"),
    (100, "C"), (90, "XC"), (50, "L"), (40, "XL"),
    (10, "X"), (9, "IX"), (5, "V"), (4, "IV"), (1, "I"),
)


def roman(number: int) -> str:
    if number <= 0:
        raise ValueError(f"Roman numerals start at 1, got {number}")
    parts = []
    for value, numeral in _ROMAN:
        while number >= value:
            parts.append(numeral)
            number -= value
    return "".join(parts)


def moon_letter(index: int) -> str:
    letters = string.ascii_lowercase
    if index < len(letters):
        return letters[index]
    return f"{letters[index % len(letters)]}{index // len(letters)}"


def planet_name(star_name: str, planet_index: int) -> str:
    return f"{star_name} - {roman(planet_index + 1)}"


def moon_name(star_name: str, planet_index: int, moon_index: int) -> str:
    return f"{planet_name(star_name, planet_index)} - {moon_letter(moon_index)}"


class StarNamer:
    """Procedural star names, unique within one cluster."""

    def __init__(self, rng: SeededRandom) -> None:
        self._rng = rng
        self._used: Set[str] = set()

    def _candidate(self) -> str:
        rng = self._rng
        style = rng.next_int(0, 3)
        if style == 0:
            return rng.item(_PREFIXES) + rng.item(_SUFFIXES)
        if style == 1:
            return rng.item(_PREFIXES) + rng.item(_SUFFIXES) + " " + rng.item(_DESIGNATIONS)
        catalogue = rng.item(["HD", "GJ", "HR", "TYC", "KOI"])
        return f"{catalogue}-{rng.next_int(1000, 100000)}"

    def next_name(self) -> str:
        name = self._candidate()
        while name in self._used:
            name = self._candidate()
        self._used.add(name)
        return name


__all__ = ["StarNamer", "moon_letter", "moon_name", "planet_name", "roman"]
