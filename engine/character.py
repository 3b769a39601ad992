"""
Generated character record.

Characters are frozen: each resolution step returns a new Character with
more fields filled in (see engine/builder.py). Fields a step couldn't
resolve stay None.
"""

from dataclasses import asdict, dataclass, field
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class Name:
    given: Optional[str] = None
    family: Optional[str] = None
    # Honorific written directly before the family name (e.g. "ir'")
    prefix: Optional[str] = None


@dataclass(frozen=True)
class Faith:
    religion: Optional[str] = None
    piety: Optional[float] = None


@dataclass(frozen=True)
class Ideal:
    text: str
    # The ideal category it came from: any, good, evil, lawful, chaotic, neutral
    axis: str

    def display(self) -> str:
        return f"{self.text} ({self.axis.capitalize()})"


@dataclass(frozen=True)
class Traits:
    personality: Optional[str] = None
    ideal: Optional[Ideal] = None
    bond: Optional[str] = None
    flaw: Optional[str] = None


@dataclass(frozen=True)
class Character:
    """
    A generated character.

    - race, culture:  keys into the reference data
    - faith:          religion key and piety (standard deviations of devotion)
    - alignment:      one of the nine alignment codes
    - lifestyle:      Poor, Middle or Rich; noble characters are Rich
    - mark, house:    dragonmark and dragonmarked house, if any
    - clan:           clan for cultures whose family names belong to clans
    - ancestor:       ancestor archetype for cultures that follow one
    """
    name: Name = field(default_factory=Name)
    gender: Optional[str] = None
    race: Optional[str] = None
    culture: Optional[str] = None
    faith: Faith = field(default_factory=Faith)
    alignment: Optional[str] = None
    lifestyle: Optional[str] = None
    noble: bool = False
    mark: Optional[str] = None
    house: Optional[str] = None
    clan: Optional[str] = None
    ancestor: Optional[str] = None
    traits: Traits = field(default_factory=Traits)

    @property
    def religion(self) -> Optional[str]:
        return self.faith.religion

    @property
    def piety(self) -> Optional[float]:
        return self.faith.piety

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)
