"""
FlagQuest - Cosmetics

Free characters, purchasable roles and level-gated continents. Purchases
spend `coins` only; the lifetime `total_coins` counter is never touched.
"""

from dataclasses import dataclass, replace
from enum import Enum, auto

from src.engine.base import Continent
from src.engine.progression import Ledger


@dataclass(frozen=True)
class Role:
    """A purchasable avatar accessory."""
    id: str
    name: str
    cost: int


class PurchaseStatus(Enum):
    """Outcome of a role purchase."""
    UNLOCKED = auto()
    ALREADY_OWNED = auto()
    INSUFFICIENT_COINS = auto()
    UNKNOWN_ROLE = auto()


@dataclass(frozen=True)
class PurchaseResult:
    ledger: Ledger
    status: PurchaseStatus


CHARACTERS: dict[str, str] = {
    "char-1": "Alex",
    "char-2": "Sam",
    "char-3": "Jordan",
    "char-4": "Casey",
    "char-5": "Taylor",
}

ROLES: dict[str, Role] = {
    role.id: role
    for role in (
        Role("role-1", "Rookie", 0),
        Role("role-2", "Compass", 500),
        Role("role-3", "Photographer", 1000),
        Role("role-4", "Cartographer", 1500),
        Role("role-5", "Backpacker", 2000),
        Role("role-6", "Lookout", 2500),
    )
}

CONTINENT_LEVELS: dict[Continent, int] = {
    Continent.EUROPE: 1,
    Continent.AMERICAS: 2,
    Continent.ASIA: 3,
    Continent.AFRICA: 4,
    Continent.OCEANIA: 5,
}


def is_continent_unlocked(level: int, continent: Continent) -> bool:
    """Whether a player at `level` may start an adventure on `continent`."""
    return level >= CONTINENT_LEVELS.get(continent, 1)


def purchase_role(ledger: Ledger, role_id: str) -> PurchaseResult:
    """Unlock a role by spending coins.

    Args:
        ledger: Current ledger
        role_id: Role to unlock

    Returns:
        PurchaseResult with the (possibly unchanged) ledger and the outcome
    """
    role = ROLES.get(role_id)
    if role is None:
        return PurchaseResult(ledger, PurchaseStatus.UNKNOWN_ROLE)
    if role_id in ledger.unlocked_avatars:
        return PurchaseResult(ledger, PurchaseStatus.ALREADY_OWNED)
    if ledger.coins < role.cost:
        return PurchaseResult(ledger, PurchaseStatus.INSUFFICIENT_COINS)

    updated = replace(
        ledger,
        coins=ledger.coins - role.cost,
        unlocked_avatars=ledger.unlocked_avatars | {role_id},
    )
    return PurchaseResult(updated, PurchaseStatus.UNLOCKED)
