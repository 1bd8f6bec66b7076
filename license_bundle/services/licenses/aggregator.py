"""
Groups packages by the license they declare.

`group_by_license` keeps the input order inside each group but makes no
promise about the order of the groups themselves; renderers that need stable
output go through `sorted_groups`.
"""

from typing import Dict, Hashable, Iterable, List, Tuple, TypeVar

from .model import License, format_license

T = TypeVar("T", bound=Hashable)


def group_by_license(pairs: Iterable[Tuple[T, License]]) -> Dict[License, List[T]]:
    """
    Collects package identities under their license.

    Args:
        pairs (Iterable[Tuple[T, License]]): (package identity, license) pairs.

    Returns:
        Dict[License, List[T]]: Identities per license, in input order.
    """
    groups: Dict[License, List[T]] = {}
    for identity, lic in pairs:
        groups.setdefault(lic, []).append(identity)
    return groups


def sorted_groups(groups: Dict[License, List[T]]) -> List[Tuple[License, List[T]]]:
    """Orders groups by canonical license string (ties broken by canonical order)."""
    return sorted(groups.items(), key=lambda item: (format_license(item[0]), item[0].sort_key()))
