"""
Alignment model.

An alignment is one of nine codes (LG, NG, CG, LN, N, CN, LE, NE, CE) made of
two axes: law/chaos (L, N, C) and good/evil (G, N, E). A bare "N" is neutral
on both axes.

A character's alignment starts from a personal disposition (two independent
normal samples) averaged with the alignments pushed on them by race, culture,
religion and anything else the caller passes as an influence.
"""

import math
import random
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from settings import ALIGNMENTS
from engine.config import AlignmentConfig
from engine.error_handler import logger

from .sets import intersection
from .tables import make_table, random_element, random_float_from_bell_curve, random_row_from_table


LAW_VALUES = {"L": 1, "N": 0, "C": -1}
GOOD_VALUES = {"G": 1, "N": 0, "E": -1}

# Codes consistent with each ideal axis
AXIS_ALIGNMENTS: Dict[str, List[str]] = {
    "any": list(ALIGNMENTS),
    "good": ["LG", "NG", "CG"],
    "evil": ["LE", "NE", "CE"],
    "lawful": ["LG", "LN", "LE"],
    "chaotic": ["CG", "CN", "CE"],
    "neutral": ["NG", "LN", "N", "CN", "NE"],
}


def is_alignment(value) -> bool:
    return isinstance(value, str) and value in ALIGNMENTS


def split_alignment(alignment: str) -> Tuple[str, str]:
    """'LG' -> ('L', 'G'); 'N' -> ('N', 'N')."""
    code = "NN" if alignment == "N" else alignment
    return code[0], code[1]


def join_alignment(law: str, good: str) -> str:
    code = f"{law}{good}"
    return "N" if code == "NN" else code


def _quantize(value: float, positive: str, negative: str, threshold: float) -> str:
    if value >= threshold:
        return positive
    if value <= -threshold:
        return negative
    return "N"


def avg_alignment(*alignments, threshold: float = 0.33) -> Optional[str]:
    """
    Average any number of alignments.

    Falsy values and anything that isn't one of the nine codes are ignored
    (they mean "no opinion", not neutral). Each axis is averaged on its own
    and re-quantized. Returns None when nothing valid was given.
    """
    valid = [a for a in alignments if is_alignment(a)]
    if not valid:
        return None

    axes = [split_alignment(a) for a in valid]
    law = sum(LAW_VALUES[lc] for lc, _ in axes) / len(axes)
    good = sum(GOOD_VALUES[ge] for _, ge in axes) / len(axes)
    return join_alignment(
        _quantize(law, "L", "C", threshold),
        _quantize(good, "G", "E", threshold),
    )


def _disposition_letter(x: float, positive: str, negative: str, threshold: float) -> str:
    if x > threshold:
        return positive
    if x < -threshold:
        return negative
    return "N"


def generate_random_alignment(rng=random, config: Optional[AlignmentConfig] = None) -> str:
    """
    Personal disposition.

    Both axes are normally distributed; anyone more than one standard
    deviation from the mean leans lawful/chaotic or good/evil.
    """
    config = config or AlignmentConfig()
    x = random_float_from_bell_curve(rng)
    y = random_float_from_bell_curve(rng)
    t = config.disposition_threshold
    return join_alignment(
        _disposition_letter(x, "L", "C", t),
        _disposition_letter(y, "G", "E", t),
    )


def disposition_distribution(config: Optional[AlignmentConfig] = None) -> Dict[str, float]:
    """Probability of each disposition that generate_random_alignment can return."""
    config = config or AlignmentConfig()
    tail = 0.5 * (1 - math.erf(config.disposition_threshold / math.sqrt(2)))
    letter_p = {"+": tail, "0": 1 - 2 * tail, "-": tail}
    law_letters = {"L": letter_p["+"], "N": letter_p["0"], "C": letter_p["-"]}
    good_letters = {"G": letter_p["+"], "N": letter_p["0"], "E": letter_p["-"]}
    return {
        join_alignment(lc, ge): lp * gp
        for lc, lp in law_letters.items()
        for ge, gp in good_letters.items()
    }


def alignment_distribution(
    influences: Iterable[Optional[str]] = (),
    config: Optional[AlignmentConfig] = None,
) -> Dict[str, float]:
    """
    Exact probability of every outcome of averaging a random disposition
    with the given influences.
    """
    config = config or AlignmentConfig()
    influences = [i for i in influences if is_alignment(i)]
    outcomes: Dict[str, float] = {}
    for disposition, p in disposition_distribution(config).items():
        result = avg_alignment(disposition, *influences, threshold=config.quantize_threshold)
        outcomes[result] = outcomes.get(result, 0.0) + p
    return outcomes


def generate_acceptable_random_alignment(
    influences: Sequence[Optional[str]] = (),
    acceptable: Optional[Sequence[str]] = None,
    rng=random,
    config: Optional[AlignmentConfig] = None,
) -> str:
    """
    Pick an alignment for a character.

    Args:
        influences: Alignments pushing on the character (race, culture, a
            pious character's religion...). Falsy entries are ignored.
        acceptable: Whitelist of codes. Empty means anything goes; a single
            code is returned as-is.

    With more than one acceptable code the result is drawn from the
    distribution of disposition-plus-influences restricted to the whitelist,
    which is the same as rerolling until an acceptable result comes up.
    """
    config = config or AlignmentConfig()
    acc = intersection(ALIGNMENTS, list(acceptable)) if acceptable else []

    if len(acc) == 1:
        return acc[0]

    if not acc:
        return avg_alignment(
            generate_random_alignment(rng, config), *influences,
            threshold=config.quantize_threshold,
        )

    outcomes = alignment_distribution(influences, config)
    reachable = {code: p for code, p in outcomes.items() if code in acc and p > 0}
    if reachable:
        row = random_row_from_table(make_table(reachable), rng)
        return row.key

    logger.warning(
        f"No acceptable alignment reachable from influences {list(influences)}; "
        f"choosing uniformly from {acc}"
    )
    return random_element(acc, rng)


def ideal_axes(alignment: str) -> List[str]:
    """
    Ideal categories a character of this alignment can draw from.

    Always 'any'. 'neutral' is added whenever either axis is neutral, so LN
    draws from both 'lawful' and 'neutral' ideals.
    """
    law, good = split_alignment(alignment)
    is_good = good == "G"
    is_evil = good == "E"
    is_lawful = law == "L"
    is_chaotic = law == "C"
    is_neutral = (not is_good and not is_evil) or (not is_lawful and not is_chaotic)

    axes = ["any"]
    if is_good:
        axes.append("good")
    if is_evil:
        axes.append("evil")
    if is_lawful:
        axes.append("lawful")
    if is_chaotic:
        axes.append("chaotic")
    if is_neutral:
        axes.append("neutral")
    return axes


def alignments_for_axis(axis: str) -> List[str]:
    """Alignment codes consistent with an ideal of the given axis."""
    return list(AXIS_ALIGNMENTS.get(axis, ALIGNMENTS))
