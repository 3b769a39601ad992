"""
Weighted random tables.

A table is a list of TableRow. Each row carries one of:
- percent: share out of ~100, rolled with two-decimal precision
- pop:     an integer population count
- weight:  any non-negative number

Draws are proportional to the row's weight. Whitelisted draws sample the
matching rows directly (renormalized over their combined weight) instead of
redrawing until a match, so they always terminate.
"""

import random
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Hashable, Iterable, List, Mapping, Optional, Sequence

from .sets import intersection


@dataclass(frozen=True)
class TableRow:
    """
    One option in a weighted table.

    - key:     what the row stands for (a race name, a gender, a tuple...)
    - percent / pop / weight: the row's probability mass, by table kind
    - data:    any other fields carried along from the source mapping
    """
    key: Hashable
    percent: Optional[float] = None
    pop: Optional[int] = None
    weight: Optional[float] = None
    data: Dict[str, Any] = field(default_factory=dict, compare=False, hash=False)

    @property
    def mass(self) -> float:
        for value in (self.percent, self.pop, self.weight):
            if value is not None:
                return max(0.0, float(value))
        return 0.0


def make_table(obj: Mapping[Hashable, Any]) -> List[TableRow]:
    """
    Build a table from a mapping of key -> weight info.

    Values may be a mapping with a `percent`, `pop` or `weight` entry (other
    entries are kept in `data`), or a bare number (used as `weight`).
    """
    rows = []
    for key, value in obj.items():
        if isinstance(value, Mapping):
            extra = {k: v for k, v in value.items() if k not in ("percent", "pop", "weight")}
            pop = value.get("pop")
            rows.append(TableRow(
                key=key,
                percent=value.get("percent"),
                pop=int(pop) if pop is not None else None,
                weight=value.get("weight"),
                data=extra,
            ))
        else:
            rows.append(TableRow(key=key, weight=float(value)))
    return rows


def table_kind(rows: Sequence[TableRow]) -> str:
    """'pop', 'percent' or 'weight' depending on what every row provides."""
    if rows and all(row.pop is not None for row in rows):
        return "pop"
    if rows and all(row.percent is not None for row in rows):
        return "percent"
    return "weight"


def table_keys(rows: Iterable[TableRow]) -> list:
    return [row.key for row in rows]


def random_element(items: Sequence[Any], rng=random) -> Optional[Any]:
    """Uniform pick from a sequence, None if it's empty."""
    if not items:
        return None
    return items[rng.randint(0, len(items) - 1)]


def random_float_from_bell_curve(rng=random, mean: float = 0.0, std: float = 1.0) -> float:
    """Sample from a normal distribution."""
    return rng.gauss(mean, std)


def _roll(rows: Sequence[TableRow], kind: str, rng) -> Optional[float]:
    total = sum(row.mass for row in rows)
    if total <= 0:
        return None
    if kind == "pop":
        return rng.randint(1, int(total))
    if kind == "percent":
        # Quantized to hundredths: whole + part / 100, never past the total
        hundredths = max(1, int(round(total * 100)))
        roll = rng.randint(0, hundredths - 1)
        return min(roll // 100 + (roll % 100) / 100, total)
    return rng.random() * total


def random_row_from_table(rows: Sequence[TableRow], rng=random) -> Optional[TableRow]:
    """
    Draw one row with probability proportional to its weight.

    Returns None for an empty table. If every weight is zero (or the roll
    lands past the last interval) a row is picked uniformly instead.
    """
    if not rows:
        return None

    kind = table_kind(rows)
    roll = _roll(rows, kind, rng)
    if roll is None:
        return random_element(rows, rng)

    cumulative = 0.0
    for row in rows:
        mass = row.mass
        if mass <= 0:
            continue
        cumulative += mass
        if kind == "pop":
            if roll <= cumulative:
                return row
        elif roll < cumulative:
            return row

    return random_element(rows, rng)


def random_row_where(
    rows: Sequence[TableRow],
    predicate: Callable[[TableRow], bool],
    rng=random,
) -> Optional[TableRow]:
    """
    Draw from the rows matching `predicate`.

    If nothing matches the whole table is used instead.
    """
    matching = [row for row in rows if predicate(row)]
    if matching:
        return random_row_from_table(matching, rng)
    return random_row_from_table(rows, rng)


def random_acceptable_row_from_table(
    rows: Sequence[TableRow],
    acceptable: Optional[Sequence[Hashable]] = None,
    rng=random,
) -> Optional[TableRow]:
    """
    Draw a row whose key is in `acceptable`.

    An empty whitelist, or one that shares no keys with the table, means any
    row is acceptable.
    """
    allowed = intersection(table_keys(rows), list(acceptable or []))
    if not allowed:
        return random_row_from_table(rows, rng)
    return random_row_where(rows, lambda row: row.key in allowed, rng)
