"""
Character names.

Given names come from the culture's name list for the character's gender.
Family names come, in order of preference, from:
- the culture's noble families (nobles only), with the culture's honorific
- the culture's clans ("Family Clan")
- the culture's surnames, plus any occupational surnames the culture uses
- nowhere, for cultures without family names
"""

import random
from dataclasses import dataclass
from typing import Optional

from engine.error_handler import logger
from settings import NONBINARY_GENDERS
from world.reference import Culture, NameList, ReferenceData

from .sets import attempt_intersection, union
from .tables import random_element


@dataclass(frozen=True)
class FamilyName:
    family: Optional[str] = None
    prefix: Optional[str] = None
    clan: Optional[str] = None


def get_name_list(data: ReferenceData, culture: Optional[Culture]) -> Optional[NameList]:
    if culture is None:
        return None
    names = data.names.get(culture.names)
    if names is None:
        logger.warning(f"No name list {culture.names!r} for culture {culture.name!r}")
    return names


def given_names_for_gender(names: NameList, gender: Optional[str]) -> list:
    if gender == "Female":
        return list(names.female)
    if gender == "Male":
        return list(names.male)
    if gender in NONBINARY_GENDERS:
        return attempt_intersection(names.female, names.male)
    return union(names.female, names.male)


def choose_given_name(
    data: ReferenceData,
    culture: Optional[Culture],
    gender: Optional[str],
    rng=random,
) -> Optional[str]:
    """
    A given name from the culture's list for this gender.

    Non-binary, genderfluid and agender characters draw from the names the
    male and female lists share, or from both lists if they share none.
    """
    names = get_name_list(data, culture)
    if names is None:
        return None
    return random_element(given_names_for_gender(names, gender), rng)


def choose_noble_family(culture: Optional[Culture], race: Optional[str], rng=random) -> Optional[FamilyName]:
    """A noble family this character's race can belong to, or None."""
    if culture is None or culture.nobility is None:
        return None
    family = random_element(culture.nobility.families_for_race(race), rng)
    if family is None:
        return None
    return FamilyName(family=family.family, prefix=culture.nobility.prefix or None)


def choose_clan_family(names: NameList, rng=random) -> Optional[FamilyName]:
    """Pick a clan, then a family within it, written "Family Clan"."""
    clans = [clan for clan, families in names.clans.items() if families]
    clan = random_element(clans, rng)
    if clan is None:
        return None
    family = random_element(names.clans[clan], rng)
    return FamilyName(family=f"{family} {clan}", clan=clan)


def choose_family_name(
    data: ReferenceData,
    culture: Optional[Culture],
    race: Optional[str] = None,
    noble: bool = False,
    rng=random,
) -> FamilyName:
    """Resolve a family name (see module docstring for the order tried)."""
    if noble:
        noble_family = choose_noble_family(culture, race, rng)
        if noble_family is not None:
            return noble_family

    names = get_name_list(data, culture)
    if names is not None and names.clans:
        clan_family = choose_clan_family(names, rng)
        if clan_family is not None:
            return clan_family

    surnames = union(names.surname if names else [], culture.occupational_surnames if culture else [])
    return FamilyName(family=random_element(surnames, rng))
