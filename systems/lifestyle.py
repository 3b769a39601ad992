"""
Gender and lifestyle draws.
"""

import random
from typing import Optional, Sequence

from engine.config import GenderConfig, LifestyleConfig
from engine.error_handler import logger
from settings import LIFESTYLES

from .tables import TableRow, random_acceptable_row_from_table, random_row_from_table


def _percent_table(table) -> list:
    return [TableRow(key=key, percent=percent) for key, percent in table.items()]


def choose_gender(
    acceptable: Optional[Sequence[str]] = None,
    eschews_gender: bool = False,
    rng=random,
    config: Optional[GenderConfig] = None,
) -> str:
    """
    Choose a gender.

    Args:
        acceptable: Genders the caller will accept. If none of the five
            genders are in it, any of them may be returned.
        eschews_gender: The character comes from a background that eschews
            typical gender norms, which makes non-binary, genderfluid and
            agender characters about as common as male or female ones.
    """
    config = config or GenderConfig()
    table = _percent_table(config.eschews if eschews_gender else config.standard)
    return random_acceptable_row_from_table(table, acceptable, rng).key


def choose_lifestyle(
    anchor: Optional[str] = None,
    rng=random,
    config: Optional[LifestyleConfig] = None,
) -> str:
    """
    Choose an economic class.

    Unanchored: 60% poor, 30% middle class, 10% rich (generous for a
    medieval setting, but this is D&D). Anchored to a class, the result
    stays within one step of it.
    """
    config = config or LifestyleConfig()
    if anchor and anchor not in config.anchored:
        logger.warning(f"Unknown lifestyle anchor {anchor!r}; ignoring it")
        anchor = None
    table = config.anchored[anchor] if anchor else config.table
    return random_row_from_table(_percent_table(table), rng).key


def roll_nobility(lifestyle: Optional[str], rng=random, config: Optional[LifestyleConfig] = None) -> bool:
    """Some of the rich are nobility."""
    config = config or LifestyleConfig()
    return lifestyle == LIFESTYLES[-1] and rng.random() < config.noble_chance

