# systems/traits.py

"""Piety and trait accumulation for generated characters.

Each source a character belongs to (everyone, their race, culture,
lifestyle, house, and their religion if they're pious) contributes a pool of
personality traits, ideals, bonds and flaws. The pools are merged, keeping
only the ideals that fit the character's alignment, and one of each is drawn.
"""

import random
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from engine.character import Ideal, Traits
from engine.config import PietyConfig
from world.reference import Ancestor, Culture, TraitPool

from .alignment import ideal_axes
from .tables import random_element, random_float_from_bell_curve


def choose_piety(culture: Optional[Culture], rng=random) -> float:
    """
    Personal devotion is normally distributed; a culture shifts its members'
    mean up or down.
    """
    disposition = random_float_from_bell_curve(rng)
    cultural = culture.piety if culture else 0.0
    return disposition + cultural


def is_pious(piety: Optional[float], config: Optional[PietyConfig] = None) -> bool:
    """Religion plays a central part in the life of anyone this far above the mean."""
    config = config or PietyConfig()
    return piety is not None and piety > config.threshold


@dataclass
class TraitSet:
    """Merged candidates; ideals are tagged with the category they came from."""
    personality: List[str] = field(default_factory=list)
    ideals: List[Ideal] = field(default_factory=list)
    bonds: List[str] = field(default_factory=list)
    flaws: List[str] = field(default_factory=list)


def add_traits(existing: Optional[TraitSet], pool: Optional[TraitPool], alignment: str) -> TraitSet:
    """
    Add a trait pool to a set of candidates.

    Personality traits, bonds and flaws are added as they are. Ideals are
    only taken from the categories that fit `alignment` (see ideal_axes).
    """
    base = existing if existing is not None else TraitSet()
    if pool is None:
        return base

    for axis in ideal_axes(alignment):
        base.ideals = base.ideals + [Ideal(text=text, axis=axis) for text in pool.ideals.get(axis, [])]

    base.personality = base.personality + list(pool.personality)
    base.bonds = base.bonds + list(pool.bonds)
    base.flaws = base.flaws + list(pool.flaws)
    return base


def fill_variables(text: Optional[str], variables: Dict[str, List[str]], rng=random) -> Optional[str]:
    """
    Replace placeholders in trait text.

    For every placeholder key found in the text, its first occurrence is
    replaced with a random entry from that key's list. Replacement is plain
    text, not a pattern.
    """
    if not text:
        return text
    for key, options in variables.items():
        if key in text and options:
            text = text.replace(key, random_element(options, rng), 1)
    return text


def choose_traits(
    trait_set: TraitSet,
    rng=random,
    variables: Optional[Dict[str, List[str]]] = None,
) -> Traits:
    """Pick one personality trait, ideal, bond and flaw."""
    variables = variables or {}
    ideal = random_element(trait_set.ideals, rng)
    if ideal is not None:
        ideal = Ideal(text=fill_variables(ideal.text, variables, rng), axis=ideal.axis)
    return Traits(
        personality=fill_variables(random_element(trait_set.personality, rng), variables, rng),
        ideal=ideal,
        bond=fill_variables(random_element(trait_set.bonds, rng), variables, rng),
        flaw=fill_variables(random_element(trait_set.flaws, rng), variables, rng),
    )


def choose_ancestor_traits(
    ancestor: Ancestor,
    alignment: str,
    rng=random,
    variables: Optional[Dict[str, List[str]]] = None,
) -> Traits:
    """
    Traits modeled on a single ancestor.

    The ancestor has one ideal per category; one that fits the character's
    alignment is chosen.
    """
    variables = variables or {}
    fitting = [
        Ideal(text=ancestor.ideals[axis], axis=axis)
        for axis in ideal_axes(alignment)
        if ancestor.ideals.get(axis)
    ]
    ideal = random_element(fitting, rng)
    if ideal is not None:
        ideal = Ideal(text=fill_variables(ideal.text, variables, rng), axis=ideal.axis)
    return Traits(
        personality=fill_variables(random_element(ancestor.personality, rng), variables, rng),
        ideal=ideal,
        bond=fill_variables(random_element(ancestor.bonds, rng), variables, rng),
        flaw=fill_variables(random_element(ancestor.flaws, rng), variables, rng),
    )
