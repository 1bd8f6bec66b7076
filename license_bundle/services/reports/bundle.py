"""
Bundle Report Module.

Renders a redistribution document that embeds the full text of every license
used by the dependencies of a root package.

The bundle always tries to embed the real text. The first license without an
available text aborts the whole document with its typed error
(`UnsupportedLicenseText`, `UnrecognizedLicense`); no placeholder is written.
"""

from typing import List, Optional, Sequence

from license_bundle.models.schemas import PackageRecord
from license_bundle.services.licenses.aggregator import group_by_license, sorted_groups
from license_bundle.services.licenses.model import License
from license_bundle.services.licenses.texts import TextTable, full_text, indent_text

ALTERNATIVE_SEPARATOR = "---"


def _license_text_lines(lic: License, texts: Optional[TextTable]) -> List[str]:
    """
    Builds the indented text block for one license group.

    Args:
        lic (License): The group's license.
        texts (Optional[TextTable]): Injected text table, or None for the bundled one.

    Returns:
        List[str]: The lines to embed (empty for an unspecified license).
    """
    if lic.is_unspecified:
        return []

    alternatives = lic.members if lic.is_multiple else (lic,)
    lines: List[str] = []
    for idx, alternative in enumerate(alternatives):
        if idx:
            lines.append(ALTERNATIVE_SEPARATOR)
        lines.extend(indent_text(full_text(alternative, texts)).split("\n"))
    return lines


def render_bundle(
        root_name: str,
        packages: Sequence[PackageRecord],
        texts: Optional[TextTable] = None) -> str:
    """
    Renders the bundle document.

    Args:
        root_name (str): Name of the package the bundle is produced for.
        packages (Sequence[PackageRecord]): The resolved dependencies.
        texts (Optional[TextTable]): Lookup table overriding the bundled texts.

    Returns:
        str: The full document.

    Raises:
        LicenseTextError: If a license text is not available.
    """
    lines = [
        f"The {root_name} package uses some third party libraries under their own license terms:",
        "",
    ]

    groups = group_by_license((package, package.license) for package in packages)
    for lic, members in sorted_groups(groups):
        for package in members:
            lines.append(f"* {package.name} - {lic}")
        lines.extend(_license_text_lines(lic, texts))
        lines.append("")

    return "\n".join(lines) + "\n"
