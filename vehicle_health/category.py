"""
Consumable categories and the keyword classifier that maps record titles to them.

Every caller that needs to know which consumable a record belongs to goes
through classify(); no other module matches on title text.
"""

from enum import Enum
from typing import FrozenSet, Optional, Tuple


class Category(Enum):
    """Tracked consumables. Declaration order is the ranking priority."""

    OIL = "oil"
    BRAKE_TIRE = "brake_tire"
    BATTERY = "battery"


# Case-insensitive substrings, checked in order. Japanese titles are common
# in imported logbooks.
KEYWORDS: Tuple[Tuple[Category, Tuple[str, ...]], ...] = (
    (Category.OIL, ("oil", "オイル")),
    (Category.BRAKE_TIRE, ("brake", "tire", "tyre", "ブレーキ", "タイヤ")),
    (Category.BATTERY, ("battery", "バッテリー")),
)

TIRE_KEYWORDS: Tuple[str, ...] = ("tire", "tyre", "タイヤ")


def _normalize(title: Optional[str]) -> str:
    return title.lower() if isinstance(title, str) else ""


def classify(title: Optional[str]) -> FrozenSet[Category]:
    """
    Return every category whose keywords appear in the title.

    Matching is crude substring search: "Oil change + tire rotation" is both
    OIL and BRAKE_TIRE, and an unmatched or empty title is the empty set.
    """
    text = _normalize(title)
    if not text:
        return frozenset()
    return frozenset(
        category
        for category, words in KEYWORDS
        if any(word in text for word in words)
    )


def mentions_tire(title: Optional[str]) -> bool:
    """True when the title refers to tires (selects the longer brake/tire interval)."""
    text = _normalize(title)
    return any(word in text for word in TIRE_KEYWORDS)
