"""
collapse the repeated associations produced by overlap queries into one ordered list per key
"""
from typing import Dict, Hashable, Iterable, List, Mapping, Tuple, TypeVar, Union

V = TypeVar('V')

MultiMap = Union[Mapping[Hashable, Iterable[V]], Iterable[Tuple[Hashable, V]]]


def _pairs(multimap: MultiMap):
    if isinstance(multimap, Mapping):
        for key, values in multimap.items():
            for value in values:
                yield key, value
    else:
        for key, value in multimap:
            yield key, value


def count_redundancy(multimap: MultiMap) -> Dict[Hashable, List[Tuple[V, int]]]:
    """
    for every key, the distinct values in the order first seen with the number of times each was seen

    Example:
        >>> count_redundancy([('j1', 'a'), ('j1', 'b'), ('j1', 'a')])
        {'j1': [('a', 2), ('b', 1)]}
    """
    counts: Dict[Hashable, Dict[V, int]] = {}
    if isinstance(multimap, Mapping):
        for key in multimap:
            counts.setdefault(key, {})
    for key, value in _pairs(multimap):
        per_key = counts.setdefault(key, {})
        per_key[value] = per_key.get(value, 0) + 1
    return {key: list(per_key.items()) for key, per_key in counts.items()}


def reduce_redundancy(multimap: MultiMap) -> Dict[Hashable, List[V]]:
    """
    Collapses a multimap into one list of distinct values per key. Values keep the order they were
    first seen in. Applying this to its own output returns the same result

    Args:
        multimap: either a mapping of key to an iterable of values or an iterable of (key, value) pairs

    Example:
        >>> reduce_redundancy({'j1': ['a', 'b', 'a'], 'j2': ['c', 'c']})
        {'j1': ['a', 'b'], 'j2': ['c']}
    """
    return {key: [value for value, _ in values] for key, values in count_redundancy(multimap).items()}
