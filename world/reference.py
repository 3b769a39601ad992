"""
Reference data types.

Everything the generator reads: races, cultures, religions, dragonmarked
houses, demographic areas, name lists, trait pools and the variables that
fill placeholders in trait text. The generator never mutates any of it, so
one ReferenceData can be shared by any number of generation calls.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Union

from settings import IDEAL_AXES


def _empty_ideals() -> Dict[str, List[str]]:
    return {axis: [] for axis in IDEAL_AXES}


@dataclass
class TraitPool:
    """
    Candidate personality traits, ideals, bonds and flaws from one source.

    `ideals` always holds every axis key (any, good, evil, lawful, chaotic,
    neutral), possibly empty.
    """
    personality: List[str] = field(default_factory=list)
    ideals: Dict[str, List[str]] = field(default_factory=_empty_ideals)
    bonds: List[str] = field(default_factory=list)
    flaws: List[str] = field(default_factory=list)

    def __post_init__(self):
        for axis in IDEAL_AXES:
            self.ideals.setdefault(axis, [])


@dataclass
class Race:
    name: str
    plural: str = ""
    type: str = ""
    alignment: Optional[str] = None
    traits: Optional[TraitPool] = None
    # culture name -> relative weight
    cultures: Dict[str, float] = field(default_factory=dict)


@dataclass
class NobleFamily:
    family: str
    # Only characters of this race can belong (None = any)
    race: Optional[str] = None


@dataclass
class Nobility:
    """Noble families of a culture and the honorific written before them (e.g. "ir'")."""
    prefix: str = ""
    families: List[NobleFamily] = field(default_factory=list)

    def families_for_race(self, race: Optional[str]) -> List[NobleFamily]:
        return [f for f in self.families if not f.race or f.race == race]


@dataclass
class Ancestor:
    """An ancestor archetype some cultures model themselves on."""
    name: str
    personality: List[str] = field(default_factory=list)
    # axis -> the ancestor's ideal for that axis
    ideals: Dict[str, str] = field(default_factory=dict)
    bonds: List[str] = field(default_factory=list)
    flaws: List[str] = field(default_factory=list)


@dataclass
class AncestorOverride:
    """Traits come from one randomly chosen ancestor instead of the merged pools."""
    ancestors: List[Ancestor] = field(default_factory=list)


@dataclass
class FamilyIdeal:
    text: str
    axis: str


@dataclass
class FamilyIdealOverride:
    """The ideal is set by the family name, and narrows the character's alignment."""
    families: Dict[str, FamilyIdeal] = field(default_factory=dict)


TraitOverride = Union[AncestorOverride, FamilyIdealOverride]


@dataclass
class Culture:
    name: str
    common: str = ""
    # Id of the name list used by this culture
    names: str = ""
    eschews_gender: bool = False
    # Added to each member's normally distributed piety
    piety: float = 0.0
    alignment: Optional[str] = None
    nobility: Optional[Nobility] = None
    traits: Optional[TraitPool] = None
    occupational_surnames: List[str] = field(default_factory=list)
    trait_override: Optional[TraitOverride] = None


@dataclass
class Religion:
    name: str
    # What a follower is called ("Vassal", "Silver Flame faithful")
    follower: str = ""
    # Restriction to a race name or race type
    race: Optional[str] = None
    # Restriction to a culture
    culture: Optional[str] = None
    alignment: Optional[str] = None
    traits: Optional[TraitPool] = None

    def allows(self, race: Optional["Race"], culture: Optional[Culture]) -> bool:
        if self.race and (race is None or self.race not in (race.name, race.type)):
            return False
        if self.culture and (culture is None or self.culture != culture.name):
            return False
        return True


@dataclass
class House:
    """A dragonmarked house."""
    name: str
    mark: str
    # Races that can manifest the house's mark
    mark_races: List[str] = field(default_factory=list)
    # Races that belong to the house without carrying its mark
    house_races: List[str] = field(default_factory=list)
    # Surname used by the house's marked heirs, e.g. "d'Cannith"
    surname: Optional[str] = None
    traits: Optional[TraitPool] = None


@dataclass
class DemographicRow:
    race: str
    culture: str
    religion: Optional[str]
    pop: int


@dataclass
class Area:
    """
    A demographic area.

    Either `rows` (race, culture, religion, population) or the older split
    tables `by_race` and `by_religion` (percentages). Rows win when both
    are present.
    """
    name: str
    population: Optional[int] = None
    rows: List[DemographicRow] = field(default_factory=list)
    by_race: Dict[str, float] = field(default_factory=dict)
    by_religion: Dict[str, float] = field(default_factory=dict)

    @property
    def is_flat(self) -> bool:
        return bool(self.rows)


@dataclass
class NameList:
    male: List[str] = field(default_factory=list)
    female: List[str] = field(default_factory=list)
    surname: List[str] = field(default_factory=list)
    # clan -> families in that clan
    clans: Dict[str, List[str]] = field(default_factory=dict)


@dataclass
class GeneralTraits:
    """Trait pools that don't belong to a race, culture, religion or house."""
    any: TraitPool = field(default_factory=TraitPool)
    # lifestyle -> pool
    lifestyle: Dict[str, TraitPool] = field(default_factory=dict)


@dataclass
class ReferenceData:
    races: Dict[str, Race] = field(default_factory=dict)
    cultures: Dict[str, Culture] = field(default_factory=dict)
    religions: Dict[str, Religion] = field(default_factory=dict)
    houses: List[House] = field(default_factory=list)
    areas: Dict[str, Area] = field(default_factory=dict)
    names: Dict[str, NameList] = field(default_factory=dict)
    # placeholder token (e.g. "[city]") -> substitutions
    variables: Dict[str, List[str]] = field(default_factory=dict)
    traits: GeneralTraits = field(default_factory=GeneralTraits)

    def get_house(self, name: Optional[str]) -> Optional[House]:
        for house in self.houses:
            if house.name == name:
                return house
        return None

    def house_for_mark(self, mark: Optional[str]) -> Optional[House]:
        for house in self.houses:
            if house.mark == mark:
                return house
        return None

    def houses_for_mark(self, mark: Optional[str]) -> List[House]:
        """Every house carrying this mark (Shadow is shared by two)."""
        return [house for house in self.houses if house.mark == mark]
