"""
Declared License Module.

Extracts the license declaration of an installed distribution from its core
metadata and rewrites it into the form understood by `parse_license`
("A/B" for alternatives, canonical identifiers for known licenses).

Metadata fields are consulted in order:
1. `License-Expression` (SPDX expression, metadata 2.4).
2. `License` when it holds a short single-line identifier.
3. `License ::` trove classifiers.
4. `License-File` entries, reported as a file declaration.
"""

import logging
from typing import Dict, List, Optional, Tuple

from license_expression import LicenseSymbol, Licensing

logger = logging.getLogger(__name__)

# Initialize the licensing parser
licensing = Licensing()

# SPDX identifiers that have a shorter canonical spelling in the license model
_SYNONYMS: Dict[str, str] = {
    "GPL-2.0-only": "GPL-2.0",
    "GPL-2.0-or-later": "GPL-2.0+",
    "GPL-3.0-only": "GPL-3.0",
    "GPL-3.0-or-later": "GPL-3.0+",
    "LGPL-2.0-only": "LGPL-2.0",
    "LGPL-2.1-only": "LGPL-2.1",
    "LGPL-2.1-or-later": "LGPL-2.1+",
    "LGPL-3.0-only": "LGPL-3.0",
    "LGPL-3.0-or-later": "LGPL-3.0+",
    "AGPL-1.0-only": "AGPL-1.0",
}

_CLASSIFIERS: Dict[str, str] = {
    "License :: OSI Approved :: MIT License": "MIT",
    "License :: OSI Approved :: Apache Software License": "Apache-2.0",
    "License :: OSI Approved :: Mozilla Public License 1.1 (MPL 1.1)": "MPL-1.1",
    "License :: OSI Approved :: Mozilla Public License 2.0 (MPL 2.0)": "MPL-2.0",
    "License :: OSI Approved :: GNU General Public License v2 (GPLv2)": "GPL-2.0",
    "License :: OSI Approved :: GNU General Public License v2 or later (GPLv2+)": "GPL-2.0+",
    "License :: OSI Approved :: GNU General Public License v3 (GPLv3)": "GPL-3.0",
    "License :: OSI Approved :: GNU General Public License v3 or later (GPLv3+)": "GPL-3.0+",
    "License :: OSI Approved :: GNU Library or Lesser General Public License (LGPL)": "LGPL-2.0",
    "License :: OSI Approved :: GNU Lesser General Public License v2 (LGPLv2)": "LGPL-2.0",
    "License :: OSI Approved :: GNU Lesser General Public License v3 (LGPLv3)": "LGPL-3.0",
    "License :: OSI Approved :: GNU Lesser General Public License v3 or later (LGPLv3+)": "LGPL-3.0+",
}

# A `License` field longer than this is a pasted license text, not an identifier
_MAX_IDENTIFIER_LENGTH = 120


def normalize_symbol(sym: str) -> str:
    """
    Normalizes a single license identifier to the spelling used by the model.

    Args:
        sym (str): The raw license identifier.

    Returns:
        str: The canonical identifier when a synonym is known, else the
        stripped input.
    """
    s = sym.strip()
    return _SYNONYMS.get(s, s)


def _or_symbols(node) -> List[LicenseSymbol]:
    """Leaf symbols of a tree made only of ORs, in order; [] if anything else appears."""
    if isinstance(node, LicenseSymbol):
        return [node]
    if not isinstance(node, licensing.OR):
        return []
    symbols: List[LicenseSymbol] = []
    for arg in node.args:
        leaves = _or_symbols(arg)
        if not leaves:
            return []
        symbols.extend(leaves)
    return symbols


def spdx_to_declared(expr: str) -> str:
    """
    Rewrites an SPDX expression into a declaration string.

    A single identifier is normalized; a disjunction of identifiers
    ("MIT OR Apache-2.0", also with parenthesized groups of ORs) becomes
    "MIT/Apache-2.0"-style alternatives. Any other expression (AND, WITH) is
    returned unchanged and will be treated as a custom license.

    Args:
        expr (str): The SPDX expression.

    Returns:
        str: The declaration string ("" for an empty expression).
    """
    s = (expr or "").strip()
    if not s or "/" in s:
        return s

    try:
        tree = licensing.parse(s)
    except Exception:  # pylint: disable=broad-exception-caught
        # Unparseable expressions are kept verbatim and end up as custom licenses.
        logger.debug("Could not parse license expression %r", s)
        return s

    if tree is None:
        return ""

    if isinstance(tree, LicenseSymbol):
        return normalize_symbol(str(tree))

    alternatives = _or_symbols(tree)
    if alternatives:
        return "/".join(normalize_symbol(str(sym)) for sym in alternatives)

    return s


def _from_classifiers(classifiers: List[str]) -> str:
    """Maps `License ::` trove classifiers to a declaration string."""
    found: List[str] = []
    for classifier in classifiers:
        if not classifier.startswith("License ::"):
            continue
        mapped = _CLASSIFIERS.get(classifier.strip())
        if mapped is None:
            mapped = classifier.split("::")[-1].strip()
        if mapped and mapped not in found and mapped != "OSI Approved":
            found.append(mapped)
    return "/".join(found)


def declared_license(metadata) -> Tuple[str, Optional[str]]:
    """
    Finds the license declaration in distribution metadata.

    Args:
        metadata: An `importlib.metadata` PackageMetadata (or any object
            exposing `get` and `get_all` like `email.message.Message`).

    Returns:
        Tuple[str, Optional[str]]: The declaration string ("" when none) and
        the first declared license file, if any.
    """
    license_files = metadata.get_all("License-File") or []
    license_file = license_files[0] if license_files else None

    expression = metadata.get("License-Expression")
    if expression and expression.strip():
        return spdx_to_declared(expression), license_file

    license_field = (metadata.get("License") or "").strip()
    if (
        license_field
        and "\n" not in license_field
        and len(license_field) <= _MAX_IDENTIFIER_LENGTH
        and license_field.upper() not in {"UNKNOWN", "NONE"}
    ):
        return spdx_to_declared(license_field), license_file

    from_classifiers = _from_classifiers(metadata.get_all("Classifier") or [])
    if from_classifiers:
        return from_classifiers, license_file

    return "", license_file
