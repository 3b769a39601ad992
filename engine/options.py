"""
Caller filters for character generation.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional

from settings import DEFAULT_COUNT, MAX_COUNT, RANDOMIZE


def _as_list(value: Any) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value] if value else []
    if isinstance(value, (list, tuple, set)):
        return [v for v in value if isinstance(v, str) and v]
    return []


def _as_choice(value: Any) -> str:
    """A forced name or sentinel; anything that isn't a non-empty string rolls randomly."""
    if isinstance(value, str) and value:
        return value
    return RANDOMIZE


def clamp_count(value: Any, maximum: int = MAX_COUNT) -> int:
    """
    Number of characters to generate.

    Anything that isn't a number becomes the default; numbers are clamped
    to [0, maximum].
    """
    try:
        count = int(float(value))
    except (TypeError, ValueError, OverflowError):
        return DEFAULT_COUNT
    return max(0, min(count, maximum))


@dataclass
class GenerationOptions:
    """
    - race, culture, religion, alignment, gender: whitelists; empty = any
    - lifestyle: economic class to anchor to, or None
    - mark, house: a name to force, "random" to roll, "none" to rule out
    - num: how many characters
    """
    race: List[str] = field(default_factory=list)
    culture: List[str] = field(default_factory=list)
    religion: List[str] = field(default_factory=list)
    alignment: List[str] = field(default_factory=list)
    gender: List[str] = field(default_factory=list)
    lifestyle: Optional[str] = None
    mark: Optional[str] = RANDOMIZE
    house: Optional[str] = RANDOMIZE
    num: int = DEFAULT_COUNT

    @classmethod
    def from_dict(cls, raw: Optional[Mapping[str, Any]] = None, max_count: int = MAX_COUNT) -> "GenerationOptions":
        """Lenient parsing of request-style options (query strings, JSON bodies)."""
        raw = raw or {}
        lifestyle = raw.get("lifestyle")
        return cls(
            race=_as_list(raw.get("race")),
            culture=_as_list(raw.get("culture")),
            religion=_as_list(raw.get("religion")),
            alignment=_as_list(raw.get("alignment")),
            gender=_as_list(raw.get("gender")),
            lifestyle=lifestyle if isinstance(lifestyle, str) and lifestyle else None,
            mark=_as_choice(raw.get("mark")),
            house=_as_choice(raw.get("house")),
            num=clamp_count(raw.get("num", DEFAULT_COUNT), max_count),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "race": list(self.race),
            "culture": list(self.culture),
            "religion": list(self.religion),
            "alignment": list(self.alignment),
            "gender": list(self.gender),
            "lifestyle": self.lifestyle,
            "mark": self.mark,
            "house": self.house,
            "num": self.num,
        }
