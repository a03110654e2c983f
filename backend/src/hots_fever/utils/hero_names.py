"""Centralized hero name normalization.

External data sources spell some heroes differently (apostrophes, accents,
abbreviations). Names are resolved once at the data-loading boundary so
the rest of the code can key on the canonical spelling in HERO_ROLES.
"""

import re
import unicodedata
from typing import Optional

from hots_fever.utils.hero_roles import HERO_ROLES

# Known alternate spellings that the folded-key lookup cannot resolve
HERO_ALIASES: dict[str, str] = {
    "elitetaurenchieftain": "E.T.C.",
    "butcher": "The Butcher",
    "lostvikings": "The Lost Vikings",
    "tlv": "The Lost Vikings",
    "vikings": "The Lost Vikings",
    "morales": "Lt. Morales",
    "hammer": "Sgt. Hammer",
    "kt": "Kel'Thuzad",
    "chogall": "Cho",
}


def _fold(name: str) -> str:
    """Lowercase, strip accents and drop everything but letters and digits."""
    decomposed = unicodedata.normalize("NFKD", name)
    ascii_only = decomposed.encode("ascii", "ignore").decode("ascii")
    return re.sub(r"[^a-z0-9]", "", ascii_only.lower())


_FOLDED_ROSTER: dict[str, str] = {_fold(hero): hero for hero in HERO_ROLES}


def normalize_hero_name(name: Optional[str]) -> Optional[str]:
    """Normalize a hero name to its canonical spelling.

    Returns the input stripped of surrounding whitespace when the hero is
    not in the roster, so newly released heroes still flow through.

    Examples:
        >>> normalize_hero_name("Kaelthas")
        "Kael'thas"
        >>> normalize_hero_name("Lucio")
        'Lúcio'
        >>> normalize_hero_name(None)
        None
    """
    if name is None:
        return None

    stripped = name.strip()
    if stripped in HERO_ROLES:
        return stripped

    folded = _fold(stripped)
    if folded in _FOLDED_ROSTER:
        return _FOLDED_ROSTER[folded]
    if folded in HERO_ALIASES:
        return HERO_ALIASES[folded]

    return stripped


def is_known_hero(name: Optional[str]) -> bool:
    """Check if a name resolves to a hero in the roster."""
    return normalize_hero_name(name) in HERO_ROLES
