"""
Wave generation: how many of each enemy, and where they start
"""

import logging
import random
from typing import List, Tuple

import numpy as np

from . import config
from .entities import TIERS, Archetype, Entity

logger = logging.getLogger(__name__)

# Highest wave with its own composition ("2222" in base 3)
MAX_WAVE = 3 ** config.WAVE_DIGITS - 1

# Rows: scouts, weavers, brutes, bosses. Columns: base-3 digits, most significant first.
# Column sums are 18, 6, 2, 1, so a carry never lowers the total head count.
TIER_WEIGHTS = np.array([
    [9, 3, 1, 1],
    [5, 2, 1, 0],
    [3, 1, 0, 0],
    [1, 0, 0, 0],
])


def wave_digits(wave: int) -> np.ndarray:
    """Base-3 digits of the wave number, fixed width, most significant first"""
    if wave < 0:
        raise ValueError(f"wave number must be non-negative, got {wave}")
    encoded = np.base_repr(min(wave, MAX_WAVE), base=3).zfill(config.WAVE_DIGITS)
    return np.array([int(digit) for digit in encoded])


def make_enemy_counts(wave: int) -> Tuple[int, ...]:
    """Number of scouts, weavers, brutes and bosses in a wave"""
    return tuple(int(n) for n in TIER_WEIGHTS @ wave_digits(wave))


def spawn(archetype: Archetype, count: int, x_min: int, x_max: int,
          term_width: int, term_height: int, rng=random) -> List[Entity]:
    """Place `count` ships at random columns, never partly off screen"""
    entities: List[Entity] = []
    if count <= 0:
        return entities

    width = archetype.width
    lo, hi = min(x_min, x_max), max(x_min, x_max)
    y = archetype.spawn_row(term_height)
    for _ in range(count):
        x = rng.randint(lo, hi)
        # Keep a clear column of the ship's own width at either edge
        x = max(x, width)
        x = min(x, term_width - width)
        x = max(x, 0)
        entities.append(Entity.spawn(archetype, x, y))
    return entities


def new_wave(state, rng=random):
    """Replace the enemies with a fresh wave for state.wave. Survivors are dropped."""
    counts = make_enemy_counts(state.wave)
    entities: List[Entity] = []
    for archetype, count in zip(TIERS, counts):
        entities.extend(spawn(archetype, count, archetype.width,
                              state.term_width - archetype.width,
                              state.term_width, state.term_height, rng))
    state.entities = entities
    state.wave_complete = False
    logger.info("Wave %d: scouts=%d weavers=%d brutes=%d bosses=%d", state.wave, *counts)
