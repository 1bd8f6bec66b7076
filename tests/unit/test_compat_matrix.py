import pytest

from license_bundle.services.licenses import matrix
from license_bundle.services.licenses.compatibility import Compatibility, can_include
from license_bundle.services.licenses.model import License, LicenseKind as K


# Every modeled license includes itself, except the structural Unspecified row
@pytest.mark.parametrize("kind", [k for k in matrix.get_matrix() if k is not K.UNSPECIFIED])
def test_matrix_is_reflexive(kind):
    assert kind in matrix.get_matrix()[kind]


# LGPL-2.0 never appears in the table, on either side
def test_lgpl_2_0_not_tabulated():
    table = matrix.get_matrix()
    assert K.LGPL_2_0 not in table
    assert all(K.LGPL_2_0 not in row for row in table.values())
    assert K.LGPL_2_0 in matrix.UNMODELED


# Every concrete known license is a consumer row of the matrix
def test_all_known_licenses_except_lgpl_2_0_have_a_row():
    known = {k for k in K if k.is_known} - matrix.UNMODELED
    assert known <= set(matrix.get_matrix())


# More restrictive licenses include everything the permissive ones do
@pytest.mark.parametrize("consumer", [k for k in K if k.is_known and k not in matrix.UNMODELED])
def test_every_license_includes_mit_and_x11(consumer):
    assert {K.MIT, K.X11} <= matrix.get_matrix()[consumer]


# The "+" variant is always includable by the fixed version of the same family
@pytest.mark.parametrize("fixed, plus", [
    (K.LGPL_2_1, K.LGPL_2_1_PLUS),
    (K.LGPL_3_0, K.LGPL_3_0_PLUS),
    (K.GPL_2_0, K.GPL_2_0_PLUS),
    (K.GPL_3_0, K.GPL_3_0_PLUS),
])
def test_fixed_version_includes_or_later(fixed, plus):
    assert plus in matrix.get_matrix()[fixed]
    assert fixed not in matrix.get_matrix()[plus]


# The engine reads the table through get_matrix, so extending it is data-only
def test_engine_uses_matrix_data(monkeypatch):
    monkeypatch.setattr(
        "license_bundle.services.licenses.compatibility.get_matrix",
        lambda: {K.MIT: frozenset({K.MIT, K.GPL_3_0})},
    )
    assert can_include(License.known(K.MIT), License.known(K.GPL_3_0)) is Compatibility.INCLUDED
    assert can_include(License.known(K.GPL_3_0), License.known(K.MIT)) is Compatibility.EXCLUDED


# ==================================================================================
#                               FULL TRUTH TABLE
# ==================================================================================

# consumer -> every license it may include, written out in full
EXPECTED_INCLUDABLE = {
    "MIT": {"MIT", "X11"},
    "X11": {"MIT", "X11"},
    "BSD-3-Clause": {"MIT", "X11", "BSD-3-Clause"},
    "Apache-2.0": {"MIT", "X11", "BSD-3-Clause", "Apache-2.0"},
    "MPL-1.1": {"MIT", "X11", "BSD-3-Clause", "MPL-1.1"},
    "MPL-2.0": {"MIT", "X11", "BSD-3-Clause", "MPL-2.0"},
    "LGPL-2.1+": {"MIT", "X11", "BSD-3-Clause", "MPL-2.0", "LGPL-2.1+"},
    "LGPL-2.1": {"MIT", "X11", "BSD-3-Clause", "MPL-2.0", "LGPL-2.1+", "LGPL-2.1"},
    "LGPL-3.0+": {"MIT", "X11", "BSD-3-Clause", "MPL-2.0", "Apache-2.0", "LGPL-2.1+", "LGPL-3.0+"},
    "LGPL-3.0": {
        "MIT", "X11", "BSD-3-Clause", "MPL-2.0", "Apache-2.0", "LGPL-2.1+", "LGPL-3.0+", "LGPL-3.0",
    },
    "GPL-2.0+": {"MIT", "X11", "BSD-3-Clause", "MPL-2.0", "LGPL-2.1+", "LGPL-2.1", "GPL-2.0+"},
    "GPL-2.0": {
        "MIT", "X11", "BSD-3-Clause", "MPL-2.0", "LGPL-2.1+", "LGPL-2.1", "GPL-2.0+", "GPL-2.0",
    },
    "GPL-3.0+": {
        "MIT", "X11", "BSD-3-Clause", "MPL-2.0", "Apache-2.0",
        "LGPL-2.1+", "LGPL-2.1", "GPL-2.0+", "GPL-3.0+",
    },
    "GPL-3.0": {
        "MIT", "X11", "BSD-3-Clause", "MPL-2.0", "Apache-2.0",
        "LGPL-2.1+", "LGPL-2.1", "GPL-2.0+", "GPL-3.0+", "GPL-3.0",
    },
    "AGPL-1.0": {
        "MIT", "X11", "BSD-3-Clause", "MPL-2.0", "Apache-2.0",
        "LGPL-2.1+", "LGPL-2.1", "GPL-2.0+", "GPL-3.0+", "GPL-3.0", "AGPL-1.0",
    },
}

KNOWN_NAMES = [k.value for k in K if k.is_known]


def _expected(consumer, dependency):
    if consumer == "LGPL-2.0" or dependency == "LGPL-2.0":
        return Compatibility.UNKNOWN
    if dependency in EXPECTED_INCLUDABLE[consumer]:
        return Compatibility.INCLUDED
    return Compatibility.EXCLUDED


def test_expected_table_covers_every_modeled_license():
    assert set(EXPECTED_INCLUDABLE) == set(KNOWN_NAMES) - {"LGPL-2.0"}


@pytest.mark.parametrize("consumer", KNOWN_NAMES)
@pytest.mark.parametrize("dependency", KNOWN_NAMES)
def test_known_pairs_match_table(consumer, dependency):
    result = can_include(License.known(K(consumer)), License.known(K(dependency)))
    assert result is _expected(consumer, dependency)


@pytest.mark.parametrize("dependency", KNOWN_NAMES)
def test_unspecified_consumer_row(dependency):
    expected = {
        "MIT": Compatibility.INCLUDED,
        "X11": Compatibility.INCLUDED,
        "BSD-3-Clause": Compatibility.INCLUDED,
        "LGPL-2.0": Compatibility.UNKNOWN,
    }.get(dependency, Compatibility.EXCLUDED)
    assert can_include(License.unspecified(), License.known(K(dependency))) is expected
