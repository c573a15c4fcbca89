"""Game configuration: built-in defaults plus an optional YAML override."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

import yaml

VOWELS = ("A", "E", "I", "O", "U")

# Standard Scrabble letter point values
LETTER_POINTS: dict[str, int] = {
    "A": 1, "B": 3, "C": 3, "D": 2, "E": 1, "F": 4, "G": 2, "H": 4,
    "I": 1, "J": 8, "K": 5, "L": 1, "M": 3, "N": 1, "O": 1, "P": 3,
    "Q": 10, "R": 1, "S": 1, "T": 1, "U": 1, "V": 4, "W": 4, "X": 8,
    "Y": 4, "Z": 10,
}

# Letter pool weights (Scrabble distribution without blanks)
LETTER_DISTRIBUTION: dict[str, int] = {
    "A": 9, "B": 2, "C": 2, "D": 4, "E": 12, "F": 2, "G": 3, "H": 2,
    "I": 9, "J": 1, "K": 1, "L": 4, "M": 2, "N": 6, "O": 8, "P": 2,
    "Q": 1, "R": 6, "S": 4, "T": 6, "U": 4, "V": 2, "W": 2, "X": 1,
    "Y": 2, "Z": 1,
}

COMMON_2_LETTER_WORDS: tuple[str, ...] = (
    "AN", "AS", "AT", "BE", "DO", "GO", "HE", "HI", "IF", "IN", "IS",
    "IT", "ME", "MY", "NO", "OF", "ON", "OR", "SO", "TO", "UP", "US", "WE",
)

COMMON_3_LETTER_WORDS: tuple[str, ...] = (
    "AND", "ARE", "BUT", "CAN", "CAT", "DOG", "EAT", "FOR", "GET", "HAS",
    "HAT", "HER", "HIS", "HOT", "ONE", "OUR", "OUT", "RAT", "RED", "SAT",
    "SEE", "SET", "SIT", "TEA", "TEN", "THE", "TOE", "USE", "WAS", "YES",
)

# Hand-checked racks used when the constrained draw gives up
FALLBACK_RACKS: tuple[tuple[str, ...], ...] = (
    ("A", "E", "I", "O", "U", "B", "C", "D", "G", "L", "N", "R", "S", "T"),
    ("A", "E", "I", "O", "C", "D", "F", "H", "L", "M", "N", "R", "S", "T"),
    ("A", "E", "I", "U", "B", "D", "G", "K", "L", "N", "P", "R", "S", "T"),
    ("A", "E", "O", "U", "C", "D", "H", "L", "M", "N", "P", "R", "S", "W"),
    ("A", "E", "I", "O", "B", "D", "F", "G", "L", "N", "R", "S", "T", "Y"),
)

BONUS_ORDER = ("TW", "DW", "TL", "DL")


@dataclass
class BonusPlacementConfig:
    min_dist_from_center: int
    allow_adjacent: bool
    edge_preference: float  # 0 = hug the center, 1 = hug the edge


def _default_bonus_counts() -> dict[str, int]:
    return {"TW": 2, "DW": 4, "TL": 4, "DL": 8}


def _default_bonus_placement() -> dict[str, BonusPlacementConfig]:
    return {
        "TW": BonusPlacementConfig(3, False, 0.9),
        "DW": BonusPlacementConfig(2, False, 0.6),
        "TL": BonusPlacementConfig(2, True, 0.5),
        "DL": BonusPlacementConfig(1, True, 0.3),
    }


@dataclass
class BoardConfig:
    size: int = 9
    min_playable_percent: float = 0.65
    max_playable_percent: float = 0.85
    symmetric: bool = True
    center_protection_radius: int = 2
    bonus_counts: dict[str, int] = field(default_factory=_default_bonus_counts)
    bonus_placement: dict[str, BonusPlacementConfig] = field(
        default_factory=_default_bonus_placement
    )


@dataclass
class LetterConstraints:
    total_letters: int = 14
    min_vowels: int = 4
    max_vowels: int = 6
    min_unique_letters: int = 10
    max_duplicates_per_letter: int = 2
    max_attempts: int = 50
    min_two_letter_words: int = 3
    min_three_letter_words: int = 2
    distribution: dict[str, int] = field(
        default_factory=lambda: dict(LETTER_DISTRIBUTION)
    )
    fallback_racks: tuple[tuple[str, ...], ...] = FALLBACK_RACKS


@dataclass
class GameConfig:
    board: BoardConfig = field(default_factory=BoardConfig)
    letters: LetterConstraints = field(default_factory=LetterConstraints)
    all_letters_bonus: int = 50

    def validate(self) -> None:
        """Raise ValueError on settings no generator run could satisfy."""
        b = self.board
        if b.size < 3:
            raise ValueError(f"board size must be at least 3, got {b.size}")
        if not 0.0 < b.min_playable_percent <= b.max_playable_percent <= 1.0:
            raise ValueError(
                "playable percentages must satisfy "
                "0 < min_playable_percent <= max_playable_percent <= 1"
            )
        if b.center_protection_radius < 1:
            raise ValueError("center_protection_radius must be at least 1")
        for name in b.bonus_counts:
            if name not in BONUS_ORDER:
                raise ValueError(f"unknown bonus type: {name}")
            if name not in b.bonus_placement:
                raise ValueError(f"no placement rules for bonus type: {name}")
        for name, rules in b.bonus_placement.items():
            if not 0.0 <= rules.edge_preference <= 1.0:
                raise ValueError(f"{name} edge_preference must be within [0, 1]")

        lc = self.letters
        if not 0 <= lc.min_vowels <= lc.max_vowels <= lc.total_letters:
            raise ValueError(
                "vowel range must satisfy 0 <= min_vowels <= max_vowels <= total_letters"
            )
        if lc.max_duplicates_per_letter < 1:
            raise ValueError("max_duplicates_per_letter must be at least 1")
        if lc.max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        if not lc.fallback_racks:
            raise ValueError("at least one fallback rack is required")
        # Imported here: letters.py depends on this module
        from dabble.puzzle.letters import meets_constraints

        for i, rack in enumerate(lc.fallback_racks):
            if not meets_constraints(rack, lc):
                raise ValueError(
                    f"fallback rack {i} ({''.join(rack)}) does not meet "
                    "the letter constraints"
                )
        for letter in lc.distribution:
            if letter not in LETTER_POINTS:
                raise ValueError(f"distribution contains non-letter: {letter!r}")


def load_config(path: Path) -> GameConfig:
    """Load game config from YAML file. Missing keys keep their defaults."""
    with open(path) as f:
        raw = yaml.safe_load(f) or {}

    b = raw.get("board", {})
    defaults = BoardConfig()

    placement = _default_bonus_placement()
    for name, p in b.get("bonus_placement", {}).items():
        base = placement.get(name, BonusPlacementConfig(1, True, 0.5))
        placement[name] = BonusPlacementConfig(
            min_dist_from_center=p.get(
                "min_dist_from_center", base.min_dist_from_center
            ),
            allow_adjacent=p.get("allow_adjacent", base.allow_adjacent),
            edge_preference=p.get("edge_preference", base.edge_preference),
        )

    board = BoardConfig(
        size=b.get("size", defaults.size),
        min_playable_percent=b.get(
            "min_playable_percent", defaults.min_playable_percent
        ),
        max_playable_percent=b.get(
            "max_playable_percent", defaults.max_playable_percent
        ),
        symmetric=b.get("symmetric", defaults.symmetric),
        center_protection_radius=b.get(
            "center_protection_radius", defaults.center_protection_radius
        ),
        bonus_counts={**defaults.bonus_counts, **b.get("bonus_counts", {})},
        bonus_placement=placement,
    )

    lt = raw.get("letters", {})
    ldefaults = LetterConstraints()
    fallback_raw = lt.get("fallback_racks")
    fallback = (
        tuple(tuple(str(ch).upper() for ch in rack) for rack in fallback_raw)
        if fallback_raw
        else ldefaults.fallback_racks
    )
    distribution_raw = lt.get("distribution")
    distribution = (
        {str(k).upper(): int(v) for k, v in distribution_raw.items()}
        if distribution_raw
        else ldefaults.distribution
    )

    letters = LetterConstraints(
        total_letters=lt.get("total_letters", ldefaults.total_letters),
        min_vowels=lt.get("min_vowels", ldefaults.min_vowels),
        max_vowels=lt.get("max_vowels", ldefaults.max_vowels),
        min_unique_letters=lt.get(
            "min_unique_letters", ldefaults.min_unique_letters
        ),
        max_duplicates_per_letter=lt.get(
            "max_duplicates_per_letter", ldefaults.max_duplicates_per_letter
        ),
        max_attempts=lt.get("max_attempts", ldefaults.max_attempts),
        min_two_letter_words=lt.get(
            "min_two_letter_words", ldefaults.min_two_letter_words
        ),
        min_three_letter_words=lt.get(
            "min_three_letter_words", ldefaults.min_three_letter_words
        ),
        distribution=distribution,
        fallback_racks=fallback,
    )

    config = GameConfig(
        board=board,
        letters=letters,
        all_letters_bonus=raw.get("all_letters_bonus", 50),
    )
    config.validate()
    return config
