"""
Dragonmarks and dragonmarked houses.

Each house is rolled independently, and only for races it accepts:
- a race that can carry the house's mark: 1 in 250 is a marked heir
- a race the house accepts without its mark: 1 in 1000 is a member
Any character who ends up with neither has a 1 in 5000 chance of an
aberrant mark, which belongs to no house.
"""

import random
from dataclasses import dataclass
from typing import Optional

from engine.config import AffiliationConfig
from engine.error_handler import logger
from settings import NONE, RANDOMIZE
from world.reference import House, ReferenceData

from .tables import random_element


@dataclass(frozen=True)
class Affiliation:
    mark: Optional[str] = None
    house: Optional[str] = None


def _is_random(value: Optional[str]) -> bool:
    return not isinstance(value, str) or value.lower() == RANDOMIZE


def _is_none(value: Optional[str]) -> bool:
    return isinstance(value, str) and value.lower() == NONE


def can_carry_mark(house: House, race: Optional[str]) -> bool:
    return race is not None and race in house.mark_races


def can_join(house: House, race: Optional[str]) -> bool:
    return race is not None and (race in house.mark_races or race in house.house_races)


def roll_affiliation(
    data: ReferenceData,
    race: Optional[str],
    rng=random,
    config: Optional[AffiliationConfig] = None,
) -> Affiliation:
    """Random mark and house for a character of this race."""
    config = config or AffiliationConfig()
    for house in data.houses:
        if can_carry_mark(house, race) and rng.random() < config.mark_chance:
            return Affiliation(mark=house.mark, house=house.name)
        if race in house.house_races and rng.random() < config.house_chance:
            return Affiliation(house=house.name)
    if rng.random() < config.aberrant_chance:
        return Affiliation(mark=config.aberrant_mark)
    return Affiliation()


def resolve_affiliation(
    data: ReferenceData,
    race: Optional[str],
    mark: Optional[str] = RANDOMIZE,
    house: Optional[str] = RANDOMIZE,
    rng=random,
    config: Optional[AffiliationConfig] = None,
) -> Affiliation:
    """
    Mark and house, honoring forced values.

    `mark` and `house` take a name to force it, "random" (or None) to roll,
    or "none" to rule it out.
    """
    config = config or AffiliationConfig()

    if not _is_random(mark) and not _is_none(mark):
        if mark != config.aberrant_mark and not data.houses_for_mark(mark):
            logger.warning(f"Unknown mark {mark!r}; ignoring it")
            mark = RANDOMIZE

    if _is_random(mark) and _is_random(house):
        return roll_affiliation(data, race, rng, config)

    forced_house = None if _is_random(house) or _is_none(house) else data.get_house(house)
    if not _is_random(house) and not _is_none(house) and forced_house is None:
        logger.warning(f"Unknown house {house!r}; ignoring it")

    if _is_none(mark):
        if forced_house is not None:
            return Affiliation(house=forced_house.name)
        if _is_none(house):
            return Affiliation()
        # Mark ruled out, house random: only unmarked membership
        for candidate in data.houses:
            if can_join(candidate, race) and rng.random() < config.house_chance:
                return Affiliation(house=candidate.name)
        return Affiliation()

    if not _is_random(mark):
        # A forced mark brings one of its houses along when that house would have them
        if forced_house is not None:
            return Affiliation(mark=mark, house=forced_house.name)
        candidates = [h for h in data.houses_for_mark(mark) if can_join(h, race)]
        if candidates and not _is_none(house):
            return Affiliation(mark=mark, house=random_element(candidates, rng).name)
        return Affiliation(mark=mark)

    # Mark random
    if forced_house is not None:
        if can_carry_mark(forced_house, race) and rng.random() < config.member_mark_chance:
            return Affiliation(mark=forced_house.mark, house=forced_house.name)
        return Affiliation(house=forced_house.name)

    # House ruled out (or unknown): marks only come from the aberrant roll
    if rng.random() < config.aberrant_chance:
        return Affiliation(mark=config.aberrant_mark)
    return Affiliation()


def house_surname(
    data: ReferenceData,
    affiliation: Affiliation,
    rng=random,
    config: Optional[AffiliationConfig] = None,
) -> Optional[str]:
    """
    The house surname a marked heir goes by, if they use it.

    Only characters carrying their house's own mark are heirs.
    """
    config = config or AffiliationConfig()
    house = data.get_house(affiliation.house)
    if house is None or not house.surname or affiliation.mark != house.mark:
        return None
    if rng.random() < config.house_surname_chance:
        return house.surname
    return None
