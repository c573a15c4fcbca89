"""Letter rack drawing with vowel, uniqueness and duplicate constraints."""

from __future__ import annotations

import logging
import math
from collections import Counter
from typing import Iterable, Sequence

from dabble.config import (
    COMMON_2_LETTER_WORDS,
    COMMON_3_LETTER_WORDS,
    VOWELS,
    LetterConstraints,
)
from dabble.core.seed import SeededRandom

logger = logging.getLogger(__name__)


def is_vowel(letter: str) -> bool:
    return letter in VOWELS


def sort_letters(letters: Iterable[str]) -> tuple[str, ...]:
    """Vowels first, then consonants, each group alphabetical."""
    letters = list(letters)
    vowels = sorted(l for l in letters if is_vowel(l))
    consonants = sorted(l for l in letters if not is_vowel(l))
    return tuple(vowels + consonants)


def can_form_word(letters: Sequence[str], word: str) -> bool:
    """True if ``word`` is a sub-multiset of ``letters``."""
    need = Counter(word)
    have = Counter(letters)
    return all(have[ch] >= n for ch, n in need.items())


def count_formable_words(letters: Sequence[str], words: Iterable[str]) -> int:
    return sum(1 for word in words if can_form_word(letters, word))


def is_playable(letters: Sequence[str], constraints: LetterConstraints) -> bool:
    """Heuristic: enough common short words can be spelled from the rack."""
    return (
        count_formable_words(letters, COMMON_2_LETTER_WORDS)
        >= constraints.min_two_letter_words
        and count_formable_words(letters, COMMON_3_LETTER_WORDS)
        >= constraints.min_three_letter_words
    )


def meets_constraints(letters: Sequence[str], constraints: LetterConstraints) -> bool:
    if len(letters) != constraints.total_letters:
        return False
    vowel_count = sum(1 for l in letters if is_vowel(l))
    if not constraints.min_vowels <= vowel_count <= constraints.max_vowels:
        return False
    counts = Counter(letters)
    if len(counts) < constraints.min_unique_letters:
        return False
    return max(counts.values(), default=0) <= constraints.max_duplicates_per_letter


def build_pools(distribution: dict[str, int]) -> tuple[list[str], list[str]]:
    """Split the weighted distribution into (vowel_pool, consonant_pool)."""
    vowels: list[str] = []
    consonants: list[str] = []
    for letter, count in distribution.items():
        pool = vowels if is_vowel(letter) else consonants
        pool.extend([letter] * count)
    return vowels, consonants


def _draw_once(
    rng: SeededRandom,
    vowel_pool: list[str],
    consonant_pool: list[str],
    constraints: LetterConstraints,
) -> list[str]:
    cap = constraints.max_duplicates_per_letter
    vowels = rng.shuffle(vowel_pool)
    consonants = rng.shuffle(consonant_pool)

    drawn: list[str] = []
    counts: Counter[str] = Counter()

    def take(source: list[str], start: int, want: int) -> int:
        """Draw up to ``want`` letters from ``source``; return next index."""
        i = start
        got = 0
        while got < want and i < len(source):
            letter = source[i]
            i += 1
            if counts[letter] < cap:
                drawn.append(letter)
                counts[letter] += 1
                got += 1
        return i

    target_vowels = rng.next_int(constraints.min_vowels, constraints.max_vowels)
    target_consonants = constraints.total_letters - target_vowels
    v_idx = take(vowels, 0, target_vowels)
    c_idx = take(consonants, 0, target_consonants)

    leftovers = rng.shuffle(vowels[v_idx:] + consonants[c_idx:])
    take(leftovers, 0, constraints.total_letters - len(drawn))
    return drawn


def draw_letters(
    rng: SeededRandom, constraints: LetterConstraints
) -> tuple[str, ...]:
    """Draw the day's rack. Never fails: falls back to a fixed rack."""
    vowel_pool, consonant_pool = build_pools(constraints.distribution)

    for attempt in range(constraints.max_attempts):
        drawn = _draw_once(rng, vowel_pool, consonant_pool, constraints)
        if meets_constraints(drawn, constraints) and is_playable(drawn, constraints):
            logger.debug("letters: accepted draw on attempt %d", attempt + 1)
            return sort_letters(drawn)

    racks = constraints.fallback_racks
    idx = math.floor(rng.next() * len(racks))
    logger.warning(
        "letters: no draw met constraints after %d attempts, using fallback rack %d",
        constraints.max_attempts,
        idx,
    )
    return sort_letters(rng.shuffle(racks[idx]))
