"""
Character builder.

A character is resolved one field group at a time, in a fixed order, because
later steps depend on earlier ones:

    demographics (race, culture, religion) -> piety -> alignment -> gender
    -> lifestyle -> given name -> family name -> mark/house -> traits

Each step is a function `resolve_x(character, context) -> Character` that
returns a new, more complete Character. A step whose inputs are missing
returns the character unchanged, leaving its fields None.
"""

import random
from dataclasses import dataclass, field, replace
from typing import Callable, List, Optional, Sequence

from settings import ALIGNMENTS

from systems.alignment import alignments_for_axis, generate_acceptable_random_alignment
from systems.houses import Affiliation, house_surname, resolve_affiliation
from systems.lifestyle import choose_gender, choose_lifestyle, roll_nobility
from systems.names import choose_family_name, choose_given_name
from systems.sets import intersection
from systems.tables import (
    TableRow,
    make_table,
    random_acceptable_row_from_table,
    random_element,
    random_row_where,
)
from systems.traits import (
    TraitSet,
    add_traits,
    choose_ancestor_traits,
    choose_piety,
    choose_traits,
    is_pious,
)
from world.reference import (
    AncestorOverride,
    Area,
    Culture,
    FamilyIdealOverride,
    Race,
    ReferenceData,
    Religion,
)

from .character import Character, Ideal
from .config import GeneratorConfig
from .error_handler import logger
from .options import GenerationOptions


@dataclass
class GenerationContext:
    """Everything a resolution step reads. Nothing in it is mutated."""
    data: ReferenceData
    area: Optional[str]
    options: GenerationOptions = field(default_factory=GenerationOptions)
    rng: random.Random = field(default_factory=random.Random)
    config: GeneratorConfig = field(default_factory=GeneratorConfig)

    def race(self, character: Character) -> Optional[Race]:
        return self.data.races.get(character.race) if character.race else None

    def culture(self, character: Character) -> Optional[Culture]:
        return self.data.cultures.get(character.culture) if character.culture else None

    def religion(self, character: Character) -> Optional[Religion]:
        religion = character.faith.religion
        return self.data.religions.get(religion) if religion else None


# --- Demographics -------------------------------------------------------------

def _usable_whitelist(whitelist: Sequence[str], available: Sequence[str]) -> List[str]:
    """A whitelist that shares nothing with what's available constrains nothing."""
    return intersection(list(available), list(whitelist)) if whitelist else []


def choose_demographic_row(area: Area, options: GenerationOptions, rng=random):
    """
    Draw a (race, culture, religion) combination by population.

    Each whitelist that overlaps the area's values restricts the draw; if the
    restrictions together rule out every combination, any may be drawn.
    """
    table = [
        TableRow(key=(row.race, row.culture, row.religion), pop=row.pop)
        for row in area.rows
    ]
    races = _usable_whitelist(options.race, [r.race for r in area.rows])
    cultures = _usable_whitelist(options.culture, [r.culture for r in area.rows])
    religions = _usable_whitelist(options.religion, [r.religion for r in area.rows if r.religion])

    def acceptable(row: TableRow) -> bool:
        race, culture, religion = row.key
        return (
            (not races or race in races)
            and (not cultures or culture in cultures)
            and (not religions or religion in religions)
        )

    picked = random_row_where(table, acceptable, rng)
    return picked.key if picked else None


def choose_race_from_demographics(
    data: ReferenceData,
    area: Area,
    options: GenerationOptions,
    rng=random,
) -> Optional[Race]:
    """A race by its share of the area's population, limited by the race whitelist."""
    table = make_table({race: {"percent": percent} for race, percent in area.by_race.items()})
    picked = random_acceptable_row_from_table(table, options.race, rng)
    return data.races.get(picked.key) if picked else None


def choose_culture_from_race(race: Race, options: GenerationOptions, rng=random) -> Optional[str]:
    """A culture by its weight among the race, limited by the culture whitelist."""
    if not race.cultures:
        return None
    picked = random_acceptable_row_from_table(make_table(race.cultures), options.culture, rng)
    return picked.key if picked else None


def choose_religion_from_demographics(
    data: ReferenceData,
    area: Area,
    race: Optional[Race],
    culture: Optional[Culture],
    options: GenerationOptions,
    rng=random,
) -> Optional[str]:
    """
    A religion by its share of the area, limited by the religion whitelist.

    Religions restricted to another race or culture are never drawn.
    """
    table = [
        row for row in make_table({name: {"percent": p} for name, p in area.by_religion.items()})
        if row.key in data.religions and data.religions[row.key].allows(race, culture)
    ]
    picked = random_acceptable_row_from_table(table, options.religion, rng)
    return picked.key if picked else None


def resolve_demographics(character: Character, ctx: GenerationContext) -> Character:
    area = ctx.data.areas.get(ctx.area) if ctx.area else None
    if area is None:
        logger.debug(f"Unknown demographic area {ctx.area!r}")
        return character

    if area.is_flat:
        picked = choose_demographic_row(area, ctx.options, ctx.rng)
        if picked is None:
            return character
        race, culture, religion = picked
        return replace(character, race=race, culture=culture, faith=replace(character.faith, religion=religion))

    race = choose_race_from_demographics(ctx.data, area, ctx.options, ctx.rng)
    if race is None:
        return character
    culture_name = choose_culture_from_race(race, ctx.options, ctx.rng)
    culture = ctx.data.cultures.get(culture_name) if culture_name else None
    religion = choose_religion_from_demographics(ctx.data, area, race, culture, ctx.options, ctx.rng)
    return replace(
        character,
        race=race.name,
        culture=culture_name,
        faith=replace(character.faith, religion=religion),
    )


# --- Piety & alignment --------------------------------------------------------

def resolve_piety(character: Character, ctx: GenerationContext) -> Character:
    if character.race is None:
        return character
    piety = choose_piety(ctx.culture(character), ctx.rng)
    return replace(character, faith=replace(character.faith, piety=piety))


def alignment_influences(character: Character, ctx: GenerationContext) -> List[Optional[str]]:
    """Alignments pushing on the character. A religion only counts for the pious."""
    race = ctx.race(character)
    culture = ctx.culture(character)
    religion = ctx.religion(character)
    influences = [
        race.alignment if race else None,
        culture.alignment if culture else None,
    ]
    if religion is not None and is_pious(character.faith.piety, ctx.config.piety):
        influences.append(religion.alignment)
    return influences


def resolve_alignment(character: Character, ctx: GenerationContext) -> Character:
    alignment = generate_acceptable_random_alignment(
        alignment_influences(character, ctx),
        ctx.options.alignment,
        ctx.rng,
        ctx.config.alignment,
    )
    return replace(character, alignment=alignment)


# --- Gender & lifestyle -------------------------------------------------------

def resolve_gender(character: Character, ctx: GenerationContext) -> Character:
    culture = ctx.culture(character)
    gender = choose_gender(
        ctx.options.gender,
        eschews_gender=culture.eschews_gender if culture else False,
        rng=ctx.rng,
        config=ctx.config.gender,
    )
    return replace(character, gender=gender)


def resolve_lifestyle(character: Character, ctx: GenerationContext) -> Character:
    """
    Economic class, and nobility for some of the rich. Only cultures with
    noble families the character's race can join have nobles.
    """
    lifestyle = choose_lifestyle(ctx.options.lifestyle, ctx.rng, ctx.config.lifestyle)
    noble = roll_nobility(lifestyle, ctx.rng, ctx.config.lifestyle)
    if noble:
        culture = ctx.culture(character)
        noble = bool(culture and culture.nobility and culture.nobility.families_for_race(character.race))
    return replace(character, lifestyle=lifestyle, noble=noble)


# --- Names --------------------------------------------------------------------

def resolve_given_name(character: Character, ctx: GenerationContext) -> Character:
    culture = ctx.culture(character)
    if culture is None or character.gender is None:
        return character
    given = choose_given_name(ctx.data, culture, character.gender, ctx.rng)
    return replace(character, name=replace(character.name, given=given))


def resolve_family_name(character: Character, ctx: GenerationContext) -> Character:
    culture = ctx.culture(character)
    if culture is None:
        return character
    family = choose_family_name(ctx.data, culture, character.race, character.noble, ctx.rng)
    return replace(
        character,
        name=replace(character.name, family=family.family, prefix=family.prefix),
        clan=family.clan,
    )


# --- Marks & houses -----------------------------------------------------------

def resolve_affiliations(character: Character, ctx: GenerationContext) -> Character:
    """
    Dragonmark and house. A marked heir may go by the house surname
    (nobles keep their family name).
    """
    if character.race is None:
        return character
    affiliation = resolve_affiliation(
        ctx.data,
        character.race,
        mark=ctx.options.mark,
        house=ctx.options.house,
        rng=ctx.rng,
        config=ctx.config.affiliation,
    )
    if affiliation == Affiliation():
        return character

    character = replace(character, mark=affiliation.mark, house=affiliation.house)
    surname = house_surname(ctx.data, affiliation, ctx.rng, ctx.config.affiliation)
    if surname and not character.noble:
        character = replace(character, name=replace(character.name, family=surname, prefix=None), clan=None)
    return character


# --- Traits -------------------------------------------------------------------

def gather_traits(character: Character, ctx: GenerationContext, alignment: str) -> TraitSet:
    """
    Merge every pool the character draws from: everyone's, their race's,
    culture's, lifestyle's, house's, and their religion's if they're pious.
    """
    race = ctx.race(character)
    culture = ctx.culture(character)
    religion = ctx.religion(character)
    house = ctx.data.get_house(character.house)

    pools = [
        ctx.data.traits.any,
        race.traits if race else None,
        culture.traits if culture else None,
        ctx.data.traits.lifestyle.get(character.lifestyle) if character.lifestyle else None,
    ]
    if religion is not None and is_pious(character.faith.piety, ctx.config.piety):
        pools.append(religion.traits)
    if house is not None:
        pools.append(house.traits)

    merged = TraitSet()
    for pool in pools:
        merged = add_traits(merged, pool, alignment)
    return merged


def _resolve_ancestor_traits(character: Character, ctx: GenerationContext, override: AncestorOverride) -> Character:
    ancestor = random_element(override.ancestors, ctx.rng)
    if ancestor is None:
        return _resolve_generic_traits(character, ctx)
    traits = choose_ancestor_traits(ancestor, character.alignment, ctx.rng, ctx.data.variables)
    return replace(character, traits=traits, ancestor=ancestor.name)


def _resolve_family_ideal_traits(
    character: Character,
    ctx: GenerationContext,
    override: FamilyIdealOverride,
) -> Character:
    """
    The family name decides the ideal, and the alignment is drawn again from
    the codes consistent with that ideal (and the caller's whitelist, where
    the two overlap).

    A caller whitelist that rules out the family's ideal keeps the alignment
    already resolved, and the character gets ordinary traits.
    """
    family_ideal = override.families.get(character.name.family) if character.name.family else None
    if family_ideal is None:
        return _resolve_generic_traits(character, ctx)

    consistent = alignments_for_axis(family_ideal.axis)
    whitelist = intersection(ctx.options.alignment, ALIGNMENTS)
    narrowed = intersection(consistent, whitelist)
    if whitelist and not narrowed:
        logger.debug(
            f"Family {character.name.family!r} ideal ({family_ideal.axis}) is outside the "
            f"alignment whitelist; keeping {character.alignment}"
        )
        return _resolve_generic_traits(character, ctx)

    acceptable = narrowed or consistent
    alignment = generate_acceptable_random_alignment(
        alignment_influences(character, ctx),
        acceptable,
        ctx.rng,
        ctx.config.alignment,
    )
    if alignment != character.alignment:
        logger.debug(
            f"Family {character.name.family!r} ideal ({family_ideal.axis}) moved alignment "
            f"{character.alignment} -> {alignment}"
        )
    character = replace(character, alignment=alignment)

    traits = choose_traits(gather_traits(character, ctx, alignment), ctx.rng, ctx.data.variables)
    ideal = Ideal(text=family_ideal.text, axis=family_ideal.axis)
    return replace(character, traits=replace(traits, ideal=ideal))


def _resolve_generic_traits(character: Character, ctx: GenerationContext) -> Character:
    merged = gather_traits(character, ctx, character.alignment)
    return replace(character, traits=choose_traits(merged, ctx.rng, ctx.data.variables))


def resolve_traits(character: Character, ctx: GenerationContext) -> Character:
    if character.alignment not in ALIGNMENTS:
        return character

    culture = ctx.culture(character)
    override = culture.trait_override if culture else None
    if isinstance(override, AncestorOverride):
        return _resolve_ancestor_traits(character, ctx, override)
    if isinstance(override, FamilyIdealOverride):
        return _resolve_family_ideal_traits(character, ctx, override)
    return _resolve_generic_traits(character, ctx)


# --- Pipeline -----------------------------------------------------------------

Step = Callable[[Character, GenerationContext], Character]

PIPELINE: Sequence[Step] = (
    resolve_demographics,
    resolve_piety,
    resolve_alignment,
    resolve_gender,
    resolve_lifestyle,
    resolve_given_name,
    resolve_family_name,
    resolve_affiliations,
    resolve_traits,
)


def build_character(ctx: GenerationContext, steps: Sequence[Step] = PIPELINE) -> Character:
    """Run every resolution step, in order, on an empty character."""
    character = Character()
    for step in steps:
        character = step(character, ctx)
    return character
