"""Hero role classifications.

Single source of truth for the playable hero roster. Every module that
needs "all heroes" or a hero's role reads it from here.
"""

from dataclasses import dataclass
from typing import Iterable, Optional

TANK = "Tank"
BRUISER = "Bruiser"
MELEE_ASSASSIN = "Melee Assassin"
RANGED_ASSASSIN = "Ranged Assassin"
HEALER = "Healer"
SUPPORT = "Support"

HERO_ROLE_NAMES = (TANK, BRUISER, MELEE_ASSASSIN, RANGED_ASSASSIN, HEALER, SUPPORT)
DAMAGE_ROLES = frozenset({MELEE_ASSASSIN, RANGED_ASSASSIN})

HERO_ROLES: dict[str, str] = {
    # Tanks
    "Anub'arak": TANK,
    "Arthas": TANK,
    "Blaze": TANK,
    "Diablo": TANK,
    "E.T.C.": TANK,
    "Garrosh": TANK,
    "Johanna": TANK,
    "Mal'Ganis": TANK,
    "Mei": TANK,
    "Muradin": TANK,
    "Stitches": TANK,
    "Tyrael": TANK,

    # Bruisers
    "Artanis": BRUISER,
    "Chen": BRUISER,
    "Cho": BRUISER,
    "Dehaka": BRUISER,
    "D.Va": BRUISER,
    "Gazlowe": BRUISER,
    "Hogger": BRUISER,
    "Imperius": BRUISER,
    "Leoric": BRUISER,
    "Malthael": BRUISER,
    "Ragnaros": BRUISER,
    "Rexxar": BRUISER,
    "Sonya": BRUISER,
    "Thrall": BRUISER,
    "Varian": BRUISER,
    "Xul": BRUISER,
    "Yrel": BRUISER,

    # Melee Assassins
    "Alarak": MELEE_ASSASSIN,
    "Illidan": MELEE_ASSASSIN,
    "Kerrigan": MELEE_ASSASSIN,
    "Maiev": MELEE_ASSASSIN,
    "Murky": MELEE_ASSASSIN,
    "Qhira": MELEE_ASSASSIN,
    "Samuro": MELEE_ASSASSIN,
    "The Butcher": MELEE_ASSASSIN,
    "Valeera": MELEE_ASSASSIN,
    "Zeratul": MELEE_ASSASSIN,

    # Ranged Assassins
    "Azmodan": RANGED_ASSASSIN,
    "Cassia": RANGED_ASSASSIN,
    "Chromie": RANGED_ASSASSIN,
    "Falstad": RANGED_ASSASSIN,
    "Fenix": RANGED_ASSASSIN,
    "Gall": RANGED_ASSASSIN,
    "Genji": RANGED_ASSASSIN,
    "Greymane": RANGED_ASSASSIN,
    "Gul'dan": RANGED_ASSASSIN,
    "Hanzo": RANGED_ASSASSIN,
    "Jaina": RANGED_ASSASSIN,
    "Junkrat": RANGED_ASSASSIN,
    "Kael'thas": RANGED_ASSASSIN,
    "Kel'Thuzad": RANGED_ASSASSIN,
    "Li-Ming": RANGED_ASSASSIN,
    "Lunara": RANGED_ASSASSIN,
    "Mephisto": RANGED_ASSASSIN,
    "Nazeebo": RANGED_ASSASSIN,
    "Nova": RANGED_ASSASSIN,
    "Orphea": RANGED_ASSASSIN,
    "Probius": RANGED_ASSASSIN,
    "Raynor": RANGED_ASSASSIN,
    "Sgt. Hammer": RANGED_ASSASSIN,
    "Sylvanas": RANGED_ASSASSIN,
    "Tracer": RANGED_ASSASSIN,
    "Tychus": RANGED_ASSASSIN,
    "Valla": RANGED_ASSASSIN,
    "Zagara": RANGED_ASSASSIN,
    "Zul'jin": RANGED_ASSASSIN,

    # Healers
    "Alexstrasza": HEALER,
    "Ana": HEALER,
    "Anduin": HEALER,
    "Auriel": HEALER,
    "Brightwing": HEALER,
    "Deckard": HEALER,
    "Kharazim": HEALER,
    "Li Li": HEALER,
    "Lt. Morales": HEALER,
    "Lúcio": HEALER,
    "Malfurion": HEALER,
    "Rehgar": HEALER,
    "Stukov": HEALER,
    "Tyrande": HEALER,
    "Uther": HEALER,
    "Whitemane": HEALER,

    # Support
    "Abathur": SUPPORT,
    "Medivh": SUPPORT,
    "The Lost Vikings": SUPPORT,
    "Tassadar": SUPPORT,
    "Zarya": SUPPORT,
}

# Sorted roster; candidate iteration order (and therefore tie-breaking) follows it.
ALL_HEROES: tuple[str, ...] = tuple(sorted(HERO_ROLES))


def get_hero_role(hero: str) -> Optional[str]:
    """Get a hero's role, or None for heroes missing from the table."""
    return HERO_ROLES.get(hero)


def get_heroes_for_role(role: str, heroes: Optional[Iterable[str]] = None) -> list[str]:
    """List heroes of a role, optionally restricted to a given pool.

    "Damage" is accepted as an alias for both assassin roles.
    """
    pool = ALL_HEROES if heroes is None else heroes
    if role == "Damage":
        return [h for h in pool if HERO_ROLES.get(h) in DAMAGE_ROLES]
    return [h for h in pool if HERO_ROLES.get(h) == role]


@dataclass
class RoleBalance:
    """Role counts for one team's picks."""

    tank: int = 0
    bruiser: int = 0
    melee_assassin: int = 0
    ranged_assassin: int = 0
    healer: int = 0
    support: int = 0

    @property
    def damage(self) -> int:
        return self.melee_assassin + self.ranged_assassin

    def count(self, role: str) -> int:
        return getattr(self, _ROLE_FIELDS[role])


_ROLE_FIELDS = {
    TANK: "tank",
    BRUISER: "bruiser",
    MELEE_ASSASSIN: "melee_assassin",
    RANGED_ASSASSIN: "ranged_assassin",
    HEALER: "healer",
    SUPPORT: "support",
}


def calculate_role_balance(heroes: Iterable[Optional[str]]) -> RoleBalance:
    """Count roles across a team's picks. Unknown heroes are ignored."""
    balance = RoleBalance()
    for hero in heroes:
        if not hero:
            continue
        role = get_hero_role(hero)
        if role is None:
            continue
        field_name = _ROLE_FIELDS[role]
        setattr(balance, field_name, getattr(balance, field_name) + 1)
    return balance
