"""
Listing Report Module.

Renders packages grouped by license, one line per license:
    "<license>: <comma-separated package names>"
"""

from typing import List, Sequence

from license_bundle.models.schemas import LicenseGroup, PackageEntry, PackageRecord
from license_bundle.services.licenses.aggregator import group_by_license, sorted_groups
from license_bundle.services.licenses.model import format_license


def build_groups(packages: Sequence[PackageRecord]) -> List[LicenseGroup]:
    """
    Groups resolved packages by license in canonical license order.

    Args:
        packages (Sequence[PackageRecord]): The resolved dependencies.

    Returns:
        List[LicenseGroup]: One group per distinct license.
    """
    groups = group_by_license((package, package.license) for package in packages)
    return [
        LicenseGroup(
            license=format_license(lic),
            packages=[PackageEntry(name=p.name, version=p.version) for p in members],
        )
        for lic, members in sorted_groups(groups)
    ]


def render_listing(packages: Sequence[PackageRecord]) -> str:
    """
    Renders the listing report.

    Args:
        packages (Sequence[PackageRecord]): The resolved dependencies.

    Returns:
        str: The report, one line per license group (empty for no packages).
    """
    lines = [
        f"{group.license}: {', '.join(entry.name for entry in group.packages)}"
        for group in build_groups(packages)
    ]
    return "".join(f"{line}\n" for line in lines)
