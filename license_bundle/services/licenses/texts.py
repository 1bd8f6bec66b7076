"""
License Text Repository Module.

This module maps a concrete license identifier to its canonical full text.
Texts are shipped as package data under `license_texts/` and read once through
`importlib.resources`, so they also work when the package is installed zipped.

Failures are typed:
- a known license without an embedded text raises `UnsupportedLicenseText`;
- a custom identifier raises `UnrecognizedLicense`;
- Multiple and Unspecified raise `InvalidCompositeRequest`, because handling
  them is the renderer's job.

The lookup table is injectable (`texts=`) so callers and tests can supply
their own fixtures instead of the bundled files.
"""

import logging
from importlib import resources
from typing import Dict, Mapping, Optional

from license_bundle.core.errors import (
    InvalidCompositeRequest,
    UnrecognizedLicense,
    UnsupportedLicenseText,
)
from .model import License, LicenseKind

logger = logging.getLogger(__name__)

TextTable = Mapping[LicenseKind, str]

# Kinds with an embedded text file, named after the canonical identifier
_EMBEDDED_KINDS = (LicenseKind.MIT, LicenseKind.APACHE_2_0)

_TEXTS_DIR = "license_texts"


def _read_resource(kind: LicenseKind) -> Optional[str]:
    """
    Reads the text file bundled for `kind`.

    Args:
        kind (LicenseKind): A known license kind.

    Returns:
        Optional[str]: The text, or None if the resource is missing.
    """
    try:
        return (
            resources.files(__package__)
            .joinpath(_TEXTS_DIR)
            .joinpath(kind.value)
            .read_text(encoding="utf-8")
        )
    except FileNotFoundError:
        logger.warning("No bundled text found for %s in %s", kind.value, _TEXTS_DIR)
        return None


def load_embedded_texts() -> Dict[LicenseKind, str]:
    """
    Loads every bundled license text.

    Returns:
        Dict[LicenseKind, str]: Mapping of license kind to its full text.
    """
    table: Dict[LicenseKind, str] = {}
    for kind in _EMBEDDED_KINDS:
        text = _read_resource(kind)
        if text:
            table[kind] = text
    logger.debug("Loaded %d embedded license texts", len(table))
    return table


_EMBEDDED: Optional[Dict[LicenseKind, str]] = None


def get_embedded_texts() -> Dict[LicenseKind, str]:
    """Returns the bundled texts, loading them on first use."""
    global _EMBEDDED  # pylint: disable=global-statement
    if _EMBEDDED is None:
        _EMBEDDED = load_embedded_texts()
    return _EMBEDDED


def full_text(lic: License, texts: Optional[TextTable] = None) -> str:
    """
    Returns the canonical full text of a single concrete license.

    Args:
        lic (License): The license to look up.
        texts (Optional[TextTable]): Lookup table to use instead of the
            bundled texts.

    Returns:
        str: The non-empty license text.

    Raises:
        InvalidCompositeRequest: For Multiple or Unspecified licenses.
        UnrecognizedLicense: For Custom licenses.
        UnsupportedLicenseText: For known licenses (and File references)
            without a text.
    """
    if lic.is_multiple or lic.is_unspecified:
        raise InvalidCompositeRequest(lic)

    if lic.is_custom:
        raise UnrecognizedLicense(lic)

    if lic.is_file:
        raise UnsupportedLicenseText(lic)

    table = get_embedded_texts() if texts is None else texts
    text = table.get(lic.kind)
    if not text:
        raise UnsupportedLicenseText(lic)
    return text


def indent_text(text: str, prefix: str = "    ") -> str:
    """Prefixes every line of `text`, as done when embedding it in a bundle."""
    return "\n".join(f"{prefix}{line}" for line in text.splitlines())
