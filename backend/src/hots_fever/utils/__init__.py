"""Utility modules for hots_fever."""

from hots_fever.utils.hero_names import (
    HERO_ALIASES,
    is_known_hero,
    normalize_hero_name,
)
from hots_fever.utils.hero_roles import (
    ALL_HEROES,
    HERO_ROLES,
    RoleBalance,
    calculate_role_balance,
    get_hero_role,
    get_heroes_for_role,
)

__all__ = [
    "HERO_ALIASES",
    "is_known_hero",
    "normalize_hero_name",
    "ALL_HEROES",
    "HERO_ROLES",
    "RoleBalance",
    "calculate_role_balance",
    "get_hero_role",
    "get_heroes_for_role",
]
