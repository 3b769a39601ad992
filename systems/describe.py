"""
Descriptions of generated characters.

Full names, the short "(alignment gender culture race)" descriptor, a phrase
for the character's devotion, and wiki categories.
"""

from dataclasses import dataclass
from typing import List, Optional

from engine.character import Character
from engine.config import PietyConfig
from settings import ALIGNMENT_NAMES
from world.reference import ReferenceData


@dataclass(frozen=True)
class Category:
    name: str
    sort_key: Optional[str] = None

    def to_wikitext(self) -> str:
        if self.sort_key:
            return f"[[Category:{self.name}|{self.sort_key}]]"
        return f"[[Category:{self.name}]]"


def family_name(character: Character) -> Optional[str]:
    """Family name with its honorific, e.g. "ir'Wynarn"."""
    if not character.name.family:
        return None
    return f"{character.name.prefix or ''}{character.name.family}"


def full_name(character: Character) -> str:
    parts = [character.name.given, family_name(character)]
    return " ".join(p for p in parts if p)


def short_descriptor(character: Character) -> str:
    """'(LG female Brelish human)'; missing fields are left out."""
    parts = [
        character.alignment,
        character.gender.lower() if character.gender else None,
        character.culture,
        character.race.lower() if character.race else None,
    ]
    return "(" + " ".join(p for p in parts if p) + ")"


def _article(word: str) -> str:
    return "an" if word[:1].lower() in "aeiou" else "a"


def describe_piety(
    character: Character,
    data: Optional[ReferenceData] = None,
    config: Optional[PietyConfig] = None,
) -> str:
    """
    How devoted the character is, e.g. "a devout Vassal".

    Bands: pious (see systems.traits.is_pious) -> devout; above the mean ->
    observant; within a standard deviation below -> casual; lower -> lapsed.
    """
    config = config or PietyConfig()
    religion = character.faith.religion
    piety = character.faith.piety
    if not religion:
        return "not religious"

    follower = None
    if data is not None and religion in data.religions:
        follower = data.religions[religion].follower
    noun = follower or f"follower of {religion}"

    if piety is None:
        return f"{_article(noun)} {noun}"
    if piety > config.threshold:
        adjective = "devout"
    elif piety > 0:
        adjective = "observant"
    elif piety > -1:
        adjective = "casual"
    else:
        adjective = "lapsed"
    return f"{_article(adjective)} {adjective} {noun}"


def default_sort_key(character: Character) -> Optional[str]:
    """'Family, Given', or just the given name."""
    given = character.name.given
    family = family_name(character)
    if family and given:
        return f"{family}, {given}"
    return given or family


def categories(character: Character, data: Optional[ReferenceData] = None) -> List[Category]:
    """
    Wiki categories for a character.

    Pages sort by "Family, Given". In a category named after the
    character's own house, noble family or clan, the family name is
    redundant and pages sort by given name alone.
    """
    sort_key = default_sort_key(character)
    result: List[Category] = []

    if character.race:
        plural = None
        if data is not None and character.race in data.races:
            plural = data.races[character.race].plural
        result.append(Category(plural or f"{character.race}s", sort_key))

    if character.culture:
        common = None
        if data is not None and character.culture in data.cultures:
            common = data.cultures[character.culture].common
        result.append(Category(f"{common or character.culture} characters", sort_key))

    if character.alignment:
        result.append(Category(f"{ALIGNMENT_NAMES[character.alignment]} characters", sort_key))

    if character.house:
        house_key = sort_key
        if data is not None:
            house = data.get_house(character.house)
            if house is not None and house.surname and character.name.family == house.surname:
                house_key = character.name.given or sort_key
        result.append(Category(f"House {character.house}", house_key))

    if character.mark:
        if data is not None and data.house_for_mark(character.mark) is None:
            # Marks outside every house (aberrant marks)
            result.append(Category(f"{character.mark} dragonmarks", sort_key))
        else:
            result.append(Category(f"Mark of {character.mark}", sort_key))

    if character.noble:
        result.append(Category("Nobility", sort_key))
        if character.name.family:
            result.append(Category(f"House {family_name(character)}", character.name.given or sort_key))

    if character.clan:
        result.append(Category(f"Clan {character.clan}", character.name.given or sort_key))

    return result
