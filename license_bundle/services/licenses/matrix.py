"""
Compatibility Matrix Module.

Static directed table of which licenses a consumer may include:
    {consumer_kind: frozenset(includable_kinds)}

Permissive licenses (MIT, X11) include each other; every copyleft family
additionally includes all permissive licenses and the same-or-less restrictive
copyleft versions. LGPL-2.0 is deliberately absent on both sides: the engine
answers Unknown for it before the table is consulted.

Adding a license only extends this data, not the engine logic.
"""

from typing import Dict, FrozenSet

from .model import LicenseKind as K

CompatibilityMap = Dict[K, FrozenSet[K]]

_PERMISSIVE = frozenset({K.MIT, K.X11})
_BSD = _PERMISSIVE | {K.BSD_3_CLAUSE}
_WEAK_BASE = _BSD | {K.MPL_2_0}

_LGPL_2_1_PLUS = _WEAK_BASE | {K.LGPL_2_1_PLUS}
_LGPL_3_0_PLUS = _WEAK_BASE | {K.APACHE_2_0, K.LGPL_2_1_PLUS, K.LGPL_3_0_PLUS}
_GPL_2_0_PLUS = _WEAK_BASE | {K.LGPL_2_1_PLUS, K.LGPL_2_1, K.GPL_2_0_PLUS}
_GPL_3_0_PLUS = _WEAK_BASE | {
    K.APACHE_2_0, K.LGPL_2_1_PLUS, K.LGPL_2_1, K.GPL_2_0_PLUS, K.GPL_3_0_PLUS,
}
_GPL_3_0 = _GPL_3_0_PLUS | {K.GPL_3_0}

_MATRIX: CompatibilityMap = {
    # A package with no license of its own may still pull in the most
    # permissive dependencies.
    K.UNSPECIFIED: _BSD,

    K.MIT: _PERMISSIVE,
    K.X11: _PERMISSIVE,
    K.BSD_3_CLAUSE: _BSD,
    K.APACHE_2_0: _BSD | {K.APACHE_2_0},
    K.MPL_1_1: _BSD | {K.MPL_1_1},
    K.MPL_2_0: _BSD | {K.MPL_2_0},

    K.LGPL_2_1_PLUS: _LGPL_2_1_PLUS,
    K.LGPL_2_1: _LGPL_2_1_PLUS | {K.LGPL_2_1},
    K.LGPL_3_0_PLUS: _LGPL_3_0_PLUS,
    K.LGPL_3_0: _LGPL_3_0_PLUS | {K.LGPL_3_0},

    K.GPL_2_0_PLUS: _GPL_2_0_PLUS,
    K.GPL_2_0: _GPL_2_0_PLUS | {K.GPL_2_0},
    K.GPL_3_0_PLUS: _GPL_3_0_PLUS,
    K.GPL_3_0: _GPL_3_0,
    K.AGPL_1_0: _GPL_3_0 | {K.AGPL_1_0},
}

# Licenses the table has no opinion about
UNMODELED: FrozenSet[K] = frozenset({K.LGPL_2_0})


def get_matrix() -> CompatibilityMap:
    """
    Retrieves the static compatibility matrix.

    Returns:
        CompatibilityMap: Mapping of consumer kind to the kinds it may include.
    """
    return _MATRIX
