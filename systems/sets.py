"""
Set helpers over plain lists.

Order of the first list is preserved so results stay reproducible for a
seeded random generator. Arguments that aren't lists or tuples are ignored.
"""

from typing import Any, List


def _lists(sets) -> List[list]:
    return [list(s) for s in sets if isinstance(s, (list, tuple))]


def intersection(*sets: Any) -> list:
    """
    Elements common to every list given.

    No lists -> []. A single list is returned as-is.
    """
    lists = _lists(sets)
    if not lists:
        return []
    if len(lists) == 1:
        return lists[0]

    result = []
    for element in lists[0]:
        if element in result:
            continue
        if all(element in other for other in lists[1:]):
            result.append(element)
    return result


def union(*sets: Any) -> list:
    """Deduplicated concatenation of every list given."""
    result = []
    for s in _lists(sets):
        for element in s:
            if element not in result:
                result.append(element)
    return result


def attempt_intersection(*sets: Any) -> list:
    """
    The intersection if it isn't empty, otherwise the union.

    Used to pool names for genders that draw from both the male and the
    female list: most name lists share no names, in which case both are used.
    """
    common = intersection(*sets)
    return common if common else union(*sets)
