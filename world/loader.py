"""
Reference data loader.

Reads the generator's reference data from a JSON file (or an already parsed
dict) into ReferenceData and validates it. Where the data originally comes
from (spreadsheets, a database) is someone else's problem: anything that
produces this JSON shape works.
"""

import json
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional

from engine.error_handler import ReferenceDataError, logger

from .reference import (
    Ancestor,
    AncestorOverride,
    Area,
    Culture,
    DemographicRow,
    FamilyIdeal,
    FamilyIdealOverride,
    GeneralTraits,
    House,
    NameList,
    Nobility,
    NobleFamily,
    Race,
    ReferenceData,
    Religion,
    TraitPool,
)
from .validation import format_problems, validate_reference_data


# Bundled sample data
DATA_DIR = Path(__file__).resolve().parent.parent / "data"
DEFAULT_DATA_FILE = DATA_DIR / "eberron.json"


def _strings(value: Any) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    return [str(v) for v in value]


def parse_trait_pool(raw: Optional[Mapping[str, Any]]) -> Optional[TraitPool]:
    if raw is None:
        return None
    ideals = raw.get("ideals") or {}
    return TraitPool(
        personality=_strings(raw.get("personality")),
        ideals={axis: _strings(texts) for axis, texts in ideals.items()},
        bonds=_strings(raw.get("bonds")),
        flaws=_strings(raw.get("flaws")),
    )


def parse_race(name: str, raw: Mapping[str, Any]) -> Race:
    return Race(
        name=name,
        plural=raw.get("plural", ""),
        type=raw.get("type", ""),
        alignment=raw.get("alignment") or None,
        traits=parse_trait_pool(raw.get("traits")),
        cultures={culture: float(weight) for culture, weight in (raw.get("cultures") or {}).items()},
    )


def parse_nobility(raw: Optional[Mapping[str, Any]]) -> Optional[Nobility]:
    if raw is None:
        return None
    return Nobility(
        prefix=raw.get("prefix", ""),
        families=[
            NobleFamily(family=f["family"], race=f.get("race") or None)
            for f in raw.get("families", [])
        ],
    )


def parse_culture(name: str, raw: Mapping[str, Any]) -> Culture:
    """
    A culture with an `ancestors` list gets ancestor-based traits; one with
    a `families` table (family -> {ideal, axis}) gets family ideals.
    """
    if raw.get("ancestors") and raw.get("families"):
        raise ReferenceDataError(f"Culture {name}: can't have both ancestors and family ideals")

    override = None
    if raw.get("ancestors"):
        override = AncestorOverride(ancestors=[
            Ancestor(
                name=a["name"],
                personality=_strings(a.get("personality")),
                ideals={axis: str(text) for axis, text in (a.get("ideals") or {}).items() if text},
                bonds=_strings(a.get("bonds")),
                flaws=_strings(a.get("flaws")),
            )
            for a in raw["ancestors"]
        ])
    elif raw.get("families"):
        override = FamilyIdealOverride(families={
            family: FamilyIdeal(text=ideal["ideal"], axis=ideal["axis"])
            for family, ideal in raw["families"].items()
        })

    return Culture(
        name=name,
        common=raw.get("common", ""),
        names=raw.get("names", name),
        eschews_gender=bool(raw.get("eschews_gender", False)),
        piety=float(raw.get("piety", 0.0)),
        alignment=raw.get("alignment") or None,
        nobility=parse_nobility(raw.get("nobility")),
        traits=parse_trait_pool(raw.get("traits")),
        occupational_surnames=_strings(raw.get("occupational_surnames")),
        trait_override=override,
    )


def parse_religion(name: str, raw: Mapping[str, Any]) -> Religion:
    return Religion(
        name=name,
        follower=raw.get("follower", ""),
        race=raw.get("race") or None,
        culture=raw.get("culture") or None,
        alignment=raw.get("alignment") or None,
        traits=parse_trait_pool(raw.get("traits")),
    )


def parse_house(raw: Mapping[str, Any]) -> House:
    return House(
        name=raw["name"],
        mark=raw["mark"],
        mark_races=_strings(raw.get("mark_races")),
        house_races=_strings(raw.get("house_races")),
        surname=raw.get("surname") or None,
        traits=parse_trait_pool(raw.get("traits")),
    )


def parse_area(name: str, raw: Mapping[str, Any]) -> Area:
    return Area(
        name=name,
        population=raw.get("population"),
        rows=[
            DemographicRow(
                race=row["race"],
                culture=row["culture"],
                religion=row.get("religion") or None,
                pop=int(row["pop"]),
            )
            for row in raw.get("demographics", [])
        ],
        by_race={race: float(p) for race, p in (raw.get("by_race") or {}).items()},
        by_religion={religion: float(p) for religion, p in (raw.get("by_religion") or {}).items()},
    )


def parse_name_list(raw: Mapping[str, Any]) -> NameList:
    return NameList(
        male=_strings(raw.get("male")),
        female=_strings(raw.get("female")),
        surname=_strings(raw.get("surname")),
        clans={clan: _strings(families) for clan, families in (raw.get("clans") or {}).items()},
    )


def parse_reference_data(raw: Mapping[str, Any]) -> ReferenceData:
    """
    Build ReferenceData from a parsed JSON object.

    Raises:
        ReferenceDataError: a required field is missing or has the wrong type
    """
    try:
        traits = raw.get("traits") or {}
        return ReferenceData(
            races={name: parse_race(name, r) for name, r in (raw.get("races") or {}).items()},
            cultures={name: parse_culture(name, c) for name, c in (raw.get("cultures") or {}).items()},
            religions={name: parse_religion(name, r) for name, r in (raw.get("religions") or {}).items()},
            houses=[parse_house(h) for h in raw.get("houses") or []],
            areas={name: parse_area(name, a) for name, a in (raw.get("areas") or {}).items()},
            names={name: parse_name_list(n) for name, n in (raw.get("names") or {}).items()},
            variables={key: _strings(values) for key, values in (raw.get("variables") or {}).items()},
            traits=GeneralTraits(
                any=parse_trait_pool(traits.get("any")) or TraitPool(),
                lifestyle={
                    lifestyle: parse_trait_pool(pool)
                    for lifestyle, pool in (traits.get("lifestyle") or {}).items()
                },
            ),
        )
    except (KeyError, TypeError, ValueError, AttributeError) as e:
        raise ReferenceDataError(
            f"Malformed reference data: {type(e).__name__}: {e}",
            user_message="The reference data file is malformed.",
        ) from e


def load_reference_data(source: Any = None, validate: bool = True) -> ReferenceData:
    """
    Load and validate reference data.

    Args:
        source: Path to a JSON file, an already parsed dict, or None for the
            bundled sample data
        validate: Check cross references (on by default)

    Raises:
        ReferenceDataError: unreadable file, malformed data or failed validation
    """
    if isinstance(source, Mapping):
        raw: Dict[str, Any] = dict(source)
    else:
        path = Path(source) if source is not None else DEFAULT_DATA_FILE
        try:
            with path.open("r", encoding="utf-8") as f:
                raw = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise ReferenceDataError(
                f"Could not read reference data from {path}: {e}",
                user_message=f"Could not read {path}.",
            ) from e
        logger.debug(f"Loaded reference data from {path}")

    data = parse_reference_data(raw)

    if validate:
        problems = validate_reference_data(data)
        if problems:
            raise ReferenceDataError(
                "Reference data failed validation:\n" + format_problems(problems),
                problems=problems,
                user_message="The reference data has broken references.",
            )
    return data
