"""
License Model Module.

This module defines the `License` value used by every other service: a tagged
union over a fixed set of well-known identifiers plus four structural cases:

- **Custom**: an identifier that is not in the known set, kept verbatim.
- **File**: the terms live in a referenced file rather than in a string.
- **Multiple**: a disjunctive declaration ("A or B"), canonically sorted.
- **Unspecified**: no declaration at all.

Parsing (`parse_license`) is total: any input string maps to some License.
Formatting (`format_license` / `str()`) gives back the canonical identifier.
"""

import functools
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Iterable, Optional, Tuple


class LicenseKind(Enum):
    """
    Tag of a License value.

    The declaration order is the canonical sort order of licenses.
    Known identifiers carry their canonical SPDX-style string as value.
    """

    MIT = "MIT"
    X11 = "X11"
    BSD_3_CLAUSE = "BSD-3-Clause"
    APACHE_2_0 = "Apache-2.0"
    LGPL_2_0 = "LGPL-2.0"
    LGPL_2_1 = "LGPL-2.1"
    LGPL_2_1_PLUS = "LGPL-2.1+"
    LGPL_3_0 = "LGPL-3.0"
    LGPL_3_0_PLUS = "LGPL-3.0+"
    MPL_1_1 = "MPL-1.1"
    MPL_2_0 = "MPL-2.0"
    GPL_2_0 = "GPL-2.0"
    GPL_2_0_PLUS = "GPL-2.0+"
    GPL_3_0 = "GPL-3.0"
    GPL_3_0_PLUS = "GPL-3.0+"
    AGPL_1_0 = "AGPL-1.0"
    CUSTOM = "Custom"
    FILE = "File"
    MULTIPLE = "Multiple"
    UNSPECIFIED = "Unspecified"

    @property
    def is_known(self) -> bool:
        return self not in _STRUCTURAL_KINDS

    @property
    def rank(self) -> int:
        return _KIND_RANK[self]


_STRUCTURAL_KINDS = frozenset({
    LicenseKind.CUSTOM,
    LicenseKind.FILE,
    LicenseKind.MULTIPLE,
    LicenseKind.UNSPECIFIED,
})

_KIND_RANK: Dict[LicenseKind, int] = {kind: idx for idx, kind in enumerate(LicenseKind)}

# Canonical identifier -> kind, for exact matches during parsing
KNOWN_IDENTIFIERS: Dict[str, LicenseKind] = {
    kind.value: kind for kind in LicenseKind if kind.is_known
}


@functools.total_ordering
@dataclass(frozen=True)
class License:
    """
    Immutable license declaration.

    Attributes:
        kind (LicenseKind): The variant tag.
        value (Optional[str]): Identifier text for Custom, path for File, else None.
        members (Tuple[License, ...]): Sorted distinct alternatives for Multiple, else empty.

    Use the class constructors (`known`, `custom`, `file`, `multiple`,
    `unspecified`) or `parse_license` rather than building instances by hand.
    """

    kind: LicenseKind
    value: Optional[str] = None
    members: Tuple["License", ...] = ()

    def __post_init__(self):
        if self.kind is LicenseKind.MULTIPLE:
            if len(self.members) < 2 or list(self.members) != sorted(set(self.members)):
                raise ValueError(
                    "Multiple needs at least two distinct sorted members; "
                    "build it with License.multiple()"
                )
        elif self.members:
            raise ValueError(f"{self.kind.name} licenses cannot hold members")

        if self.kind in (LicenseKind.CUSTOM, LicenseKind.FILE):
            if self.value is None:
                raise ValueError(f"{self.kind.name} licenses need a value")
        elif self.value is not None:
            raise ValueError(f"{self.kind.name} licenses cannot hold a value")

    # ------------------------------------------------------------------
    # CONSTRUCTORS
    # ------------------------------------------------------------------

    @classmethod
    def known(cls, kind: LicenseKind) -> "License":
        if not kind.is_known:
            raise ValueError(f"{kind.name} is not a known license identifier")
        return cls(kind)

    @classmethod
    def custom(cls, text: str) -> "License":
        return cls(LicenseKind.CUSTOM, value=text)

    @classmethod
    def file(cls, path) -> "License":
        return cls(LicenseKind.FILE, value=str(path))

    @classmethod
    def unspecified(cls) -> "License":
        return cls(LicenseKind.UNSPECIFIED)

    @classmethod
    def multiple(cls, licenses: Iterable["License"]) -> "License":
        """
        Builds a disjunctive declaration out of `licenses`.

        Nested Multiple values are flattened and duplicates collapsed, then the
        alternatives are sorted canonically so that equal sets compare equal.
        A set that collapses to a single license is returned as that license.

        Args:
            licenses (Iterable[License]): The alternatives, in any order.

        Returns:
            License: A Multiple license, or the single remaining alternative.
        """
        flat = set()
        for lic in licenses:
            if lic.is_multiple:
                flat.update(lic.members)
            else:
                flat.add(lic)

        if not flat:
            return cls.unspecified()
        if len(flat) == 1:
            return flat.pop()
        return cls(LicenseKind.MULTIPLE, members=tuple(sorted(flat)))

    # ------------------------------------------------------------------
    # PREDICATES
    # ------------------------------------------------------------------

    @property
    def is_known(self) -> bool:
        return self.kind.is_known

    @property
    def is_custom(self) -> bool:
        return self.kind is LicenseKind.CUSTOM

    @property
    def is_file(self) -> bool:
        return self.kind is LicenseKind.FILE

    @property
    def is_multiple(self) -> bool:
        return self.kind is LicenseKind.MULTIPLE

    @property
    def is_unspecified(self) -> bool:
        return self.kind is LicenseKind.UNSPECIFIED

    # ------------------------------------------------------------------
    # ORDERING AND FORMATTING
    # ------------------------------------------------------------------

    def sort_key(self) -> tuple:
        return (
            self.kind.rank,
            self.value or "",
            tuple(member.sort_key() for member in self.members),
        )

    def __lt__(self, other: "License") -> bool:
        if not isinstance(other, License):
            return NotImplemented
        return self.sort_key() < other.sort_key()

    def __str__(self) -> str:
        return format_license(self)


def parse_license(text: str) -> License:
    """
    Parses a free-form license declaration. Never fails.

    - Surrounding whitespace is ignored.
    - An exact known identifier (e.g. "MIT", "GPL-2.0+") gives that license.
    - Text containing "/" is split into alternatives, each parsed recursively,
      and combined into a canonically sorted Multiple.
    - Anything else is kept verbatim as a Custom license.

    Args:
        text (str): The declared license string (e.g. "MIT/Apache-2.0").

    Returns:
        License: The parsed license value.
    """
    s = text.strip()

    kind = KNOWN_IDENTIFIERS.get(s)
    if kind is not None:
        return License(kind)

    if "/" in s:
        return License.multiple(parse_license(part) for part in s.split("/"))

    return License.custom(s)


def format_license(lic: License) -> str:
    """
    Renders a license back to its canonical text.

    Known identifiers render as themselves, `Custom(s)` and `File(p)` keep
    their wrapper, alternatives are joined with " OR " and an unspecified
    license renders as "Unlicensed".
    """
    if lic.is_known:
        return lic.kind.value
    if lic.is_custom:
        return f"Custom({lic.value})"
    if lic.is_file:
        return f"File({lic.value})"
    if lic.is_multiple:
        return " OR ".join(format_license(member) for member in lic.members)
    return "Unlicensed"


UNSPECIFIED = License.unspecified()
