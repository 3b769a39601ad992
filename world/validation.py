"""
Validation and integrity checking for reference data.

Run once when data is loaded, so broken references are reported up front
instead of surfacing as missing fields deep inside generation.
"""

import math
from typing import Dict, List

from settings import ALIGNMENTS, IDEAL_AXES, LIFESTYLES

from .reference import AncestorOverride, FamilyIdealOverride, ReferenceData, TraitPool


def _check_alignment(value, label: str, errors: List[str]) -> None:
    if value is not None and value not in ALIGNMENTS:
        errors.append(f"{label}: invalid alignment {value!r}")


def _check_pool(pool: TraitPool, label: str, errors: List[str]) -> None:
    for axis in pool.ideals:
        if axis not in IDEAL_AXES:
            errors.append(f"{label}: unknown ideal category {axis!r}")


def validate_races(data: ReferenceData) -> List[str]:
    errors = []
    for name, race in data.races.items():
        _check_alignment(race.alignment, f"Race {name}", errors)
        for culture, weight in race.cultures.items():
            if culture not in data.cultures:
                errors.append(f"Race {name}: culture {culture!r} not found")
            if weight < 0:
                errors.append(f"Race {name}: negative weight for culture {culture!r}")
        if race.traits is not None:
            _check_pool(race.traits, f"Race {name}", errors)
    return errors


def validate_cultures(data: ReferenceData) -> List[str]:
    errors = []
    for name, culture in data.cultures.items():
        _check_alignment(culture.alignment, f"Culture {name}", errors)
        if culture.names and culture.names not in data.names:
            errors.append(f"Culture {name}: name list {culture.names!r} not found")
        if not math.isfinite(culture.piety):
            errors.append(f"Culture {name}: piety must be a finite number")
        if culture.nobility is not None:
            if not culture.nobility.families:
                errors.append(f"Culture {name}: nobility has no families")
            for family in culture.nobility.families:
                if family.race and family.race not in data.races:
                    errors.append(f"Culture {name}: noble family {family.family!r} has unknown race {family.race!r}")
        if culture.traits is not None:
            _check_pool(culture.traits, f"Culture {name}", errors)

        override = culture.trait_override
        if isinstance(override, AncestorOverride):
            if not override.ancestors:
                errors.append(f"Culture {name}: ancestor traits without any ancestors")
            for ancestor in override.ancestors:
                for axis in ancestor.ideals:
                    if axis not in IDEAL_AXES:
                        errors.append(f"Culture {name}: ancestor {ancestor.name!r} has unknown ideal category {axis!r}")
        elif isinstance(override, FamilyIdealOverride):
            for family, ideal in override.families.items():
                if ideal.axis not in IDEAL_AXES:
                    errors.append(f"Culture {name}: family {family!r} has unknown ideal category {ideal.axis!r}")
    return errors


def validate_religions(data: ReferenceData) -> List[str]:
    errors = []
    race_names = set(data.races)
    race_types = {race.type for race in data.races.values() if race.type}
    for name, religion in data.religions.items():
        _check_alignment(religion.alignment, f"Religion {name}", errors)
        if religion.race and religion.race not in race_names | race_types:
            errors.append(f"Religion {name}: restricted to unknown race {religion.race!r}")
        if religion.culture and religion.culture not in data.cultures:
            errors.append(f"Religion {name}: restricted to unknown culture {religion.culture!r}")
        if religion.traits is not None:
            _check_pool(religion.traits, f"Religion {name}", errors)
    return errors


def validate_houses(data: ReferenceData) -> List[str]:
    errors = []
    seen = set()
    for house in data.houses:
        if house.name in seen:
            errors.append(f"House {house.name}: defined more than once")
        seen.add(house.name)
        if not house.mark:
            errors.append(f"House {house.name}: missing mark")
        for race in house.mark_races + house.house_races:
            if race not in data.races:
                errors.append(f"House {house.name}: unknown race {race!r}")
    return errors


def validate_areas(data: ReferenceData) -> List[str]:
    errors = []
    for name, area in data.areas.items():
        if not area.rows and not area.by_race:
            errors.append(f"Area {name}: no demographics")
        for row in area.rows:
            if row.race not in data.races:
                errors.append(f"Area {name}: unknown race {row.race!r}")
            if row.culture not in data.cultures:
                errors.append(f"Area {name}: unknown culture {row.culture!r}")
            if row.religion and row.religion not in data.religions:
                errors.append(f"Area {name}: unknown religion {row.religion!r}")
            if row.pop < 0:
                errors.append(f"Area {name}: negative population for {row.race}/{row.culture}")
        for race in area.by_race:
            if race not in data.races:
                errors.append(f"Area {name}: unknown race {race!r}")
        for religion in area.by_religion:
            if religion not in data.religions:
                errors.append(f"Area {name}: unknown religion {religion!r}")
    return errors


def validate_traits(data: ReferenceData) -> List[str]:
    errors = []
    _check_pool(data.traits.any, "Universal traits", errors)
    for lifestyle, pool in data.traits.lifestyle.items():
        if lifestyle not in LIFESTYLES:
            errors.append(f"Lifestyle traits: unknown lifestyle {lifestyle!r}")
        _check_pool(pool, f"Lifestyle {lifestyle}", errors)
    return errors


def validate_reference_data(data: ReferenceData) -> Dict[str, List[str]]:
    """
    Validate every section of the reference data.

    Returns:
        Dict mapping section name to its problems; sections without
        problems are left out, so an empty dict means the data is valid.
    """
    checks = {
        "races": validate_races,
        "cultures": validate_cultures,
        "religions": validate_religions,
        "houses": validate_houses,
        "areas": validate_areas,
        "traits": validate_traits,
    }
    results = {}
    for section, check in checks.items():
        errors = check(data)
        if errors:
            results[section] = errors
    return results


def format_problems(problems: Dict[str, List[str]]) -> str:
    lines = []
    for section, errors in problems.items():
        lines.append(f"{section}:")
        lines.extend(f"  - {error}" for error in errors)
    return "\n".join(lines)
