"""
Pytest configuration and shared fixtures.

This file is automatically discovered by pytest and provides fixtures
available to all test files.
"""

import random

import pytest

from world.loader import DEFAULT_DATA_FILE, load_reference_data
from world.reference import (
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


@pytest.fixture
def rng() -> random.Random:
    """
    A seeded random generator, so every test run draws the same numbers.
    """
    return random.Random(1234)


@pytest.fixture
def sample_pool() -> TraitPool:
    """
    A trait pool with one ideal in every category.
    """
    return TraitPool(
        personality=["I am calm."],
        ideals={
            "any": ["Any ideal"],
            "good": ["Good ideal"],
            "evil": ["Evil ideal"],
            "lawful": ["Lawful ideal"],
            "chaotic": ["Chaotic ideal"],
            "neutral": ["Neutral ideal"],
        },
        bonds=["My family."],
        flaws=["I am greedy."],
    )


@pytest.fixture
def small_data() -> ReferenceData:
    """
    A small reference dataset covering every kind of culture:
    noble (Brelish), family ideals (Mror), ancestors (Tairnadal) and clans (Zil).
    """
    universal = TraitPool(
        personality=["I am polite."],
        ideals={"any": ["Aspiration."], "neutral": ["Balance."]},
        bonds=["My hometown, [city]."],
        flaws=["I gamble."],
    )
    return ReferenceData(
        races={
            "Human": Race("Human", plural="Humans", type="Humanoid", cultures={"Brelish": 1}),
            "Dwarf": Race("Dwarf", plural="Dwarves", type="Humanoid", alignment="LG", cultures={"Mror": 1}),
            "Elf": Race("Elf", plural="Elves", type="Humanoid", alignment="CG", cultures={"Tairnadal": 1}),
            "Gnome": Race("Gnome", plural="Gnomes", type="Humanoid", alignment="NG", cultures={"Zil": 1}),
            "Warforged": Race("Warforged", plural="Warforged", type="Construct", alignment="LN",
                              cultures={"Warforged": 1}),
        },
        cultures={
            "Brelish": Culture(
                "Brelish", common="Brelish", names="Common", alignment="CG",
                nobility=Nobility(prefix="ir'", families=[NobleFamily("Wynarn", race="Human")]),
                occupational_surnames=["Smith"],
            ),
            "Mror": Culture(
                "Mror", common="Mror", names="Dwarvish", alignment="LN",
                trait_override=FamilyIdealOverride(families={
                    "Kundarak": FamilyIdeal("Security.", "lawful"),
                }),
            ),
            "Tairnadal": Culture(
                "Tairnadal", common="Valenar", names="Elvish", piety=1.0,
                trait_override=AncestorOverride(ancestors=[
                    Ancestor(
                        "Vadallia",
                        personality=["I am brave."],
                        ideals={"chaotic": "Glory.", "good": "Protection.", "neutral": "Tradition."},
                        bonds=["My horse."],
                        flaws=["I am reckless."],
                    ),
                ]),
            ),
            "Zil": Culture("Zil", common="Zil", names="Zil", eschews_gender=True),
            "Warforged": Culture("Warforged", common="Warforged", names="Warforged"),
        },
        religions={
            "Sovereign Host": Religion("Sovereign Host", follower="Vassal", alignment="NG"),
            "Becoming God": Religion("Becoming God", follower="Adherent", race="Construct", alignment="LN"),
        },
        houses=[
            House("Cannith", mark="Making", mark_races=["Human"], house_races=["Dwarf"], surname="d'Cannith"),
        ],
        areas={
            "Town": Area("Town", population=1000, rows=[
                DemographicRow("Human", "Brelish", "Sovereign Host", 500),
                DemographicRow("Dwarf", "Mror", "Sovereign Host", 300),
                DemographicRow("Elf", "Tairnadal", None, 100),
                DemographicRow("Gnome", "Zil", "Sovereign Host", 100),
            ]),
            "Split": Area(
                "Split",
                by_race={"Human": 50, "Warforged": 50},
                by_religion={"Sovereign Host": 50, "Becoming God": 50},
            ),
        },
        names={
            "Common": NameList(male=["Boranel", "Darro"], female=["Aurala", "Diani"], surname=["Tain"]),
            "Dwarvish": NameList(male=["Dorn"], female=["Dagna"], surname=["Kundarak"]),
            "Elvish": NameList(male=["Varis"], female=["Shira", "Varis"]),
            "Zil": NameList(male=["Orlin"], female=["Nissa"], clans={"Lysse": ["Davandi"]}),
            "Warforged": NameList(male=["Anchor"], female=["Anchor"]),
        },
        variables={"[city]": ["Sharn"]},
        traits=GeneralTraits(any=universal, lifestyle={"Rich": TraitPool(flaws=["I am spoiled."])}),
    )


@pytest.fixture(scope="session")
def eberron_data() -> ReferenceData:
    """
    The bundled sample data, loaded once for the whole session.
    """
    return load_reference_data(DEFAULT_DATA_FILE)
