"""
Difficulty levels and their key sets.

Each difficulty names the motions a learner practises. The key set is handed
to sessions as an opaque allow-list of sequence-notation strings; multi-key
entries such as "gg" or "ge" are parsed into token sequences by whoever
builds targets from them.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from loguru import logger


class Difficulty(str, Enum):
    """Difficulty selection offered to the learner."""

    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"
    MEISTER = "meister"

    @property
    def level(self) -> int:
        """Numeric rank, used to filter lesson steps."""
        return _LEVELS[self]


_LEVELS = {
    Difficulty.EASY: 1,
    Difficulty.MEDIUM: 2,
    Difficulty.HARD: 3,
    Difficulty.MEISTER: 4,
}


@dataclass(frozen=True)
class KeySet:
    """Accepted motion tokens for one difficulty."""

    difficulty: Difficulty
    keys: tuple[str, ...]

    def unique_keys(self) -> list[str]:
        """Keys in declared order without duplicates (for display)."""
        return list(dict.fromkeys(self.keys))

    def __contains__(self, key: object) -> bool:
        return key in self.keys

    def __len__(self) -> int:
        return len(self.keys)


_BASIC = ("h", "j", "k", "l")
_MEDIUM = _BASIC + ("w", "b", "$", "%", "gg", "G")
_HARD = _MEDIUM + ("0", "^", "e", "ge", "{", "}", "(", ")")
_MEISTER = (
    # Basic movement
    "h", "j", "k", "l",
    # Word movement
    "w", "b", "e", "ge",
    # Line movement
    "0", "^", "$",
    # Document movement
    "gg", "G", "{", "}", "(", ")",
    # Screen movement
    "H", "M", "L",
    # Find/Till
    "f", "F", "t", "T",
    # Search
    "*", "#", "n", "N", "/", "?",
    # Matching
    "%",
    # Marks & jumps
    "''", "``",
    # Page scrolling
    "Ctrl+d", "Ctrl+u", "Ctrl+f", "Ctrl+b", "Ctrl+e", "Ctrl+y",
)

KEY_SETS: dict[Difficulty, KeySet] = {
    Difficulty.EASY: KeySet(Difficulty.EASY, _BASIC),
    Difficulty.MEDIUM: KeySet(Difficulty.MEDIUM, _MEDIUM),
    Difficulty.HARD: KeySet(Difficulty.HARD, _HARD),
    Difficulty.MEISTER: KeySet(Difficulty.MEISTER, _MEISTER),
}


def get_difficulty(name: str | Difficulty) -> Difficulty:
    """Resolve a difficulty name, falling back to easy for unknown names."""
    if isinstance(name, Difficulty):
        return name
    try:
        return Difficulty(name.strip().lower())
    except ValueError:
        logger.warning("Unknown difficulty {!r}, falling back to easy", name)
        return Difficulty.EASY


def get_key_set(name: str | Difficulty) -> KeySet:
    """Key set for a difficulty name (unknown names get the easy set)."""
    return KEY_SETS[get_difficulty(name)]
