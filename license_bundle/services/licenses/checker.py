"""
Compatibility Checker Module.

This module evaluates every resolved dependency against the root package's
own license, one pair at a time, and reports the outcome with the trace of
the rules that produced it.
"""

from typing import List, Sequence

from license_bundle.models.schemas import CompatibilityIssue, PackageRecord
from .compatibility import Compatibility, explain
from .model import License, format_license

_COMPATIBLE_FLAG = {
    Compatibility.INCLUDED: True,
    Compatibility.EXCLUDED: False,
    Compatibility.UNKNOWN: None,
}


def check_packages(root_license: License, packages: Sequence[PackageRecord]) -> List[CompatibilityIssue]:
    """
    Checks whether the root license may include each dependency.

    Args:
        root_license (License): The root package's license.
        packages (Sequence[PackageRecord]): The resolved dependencies.

    Returns:
        List[CompatibilityIssue]: One entry per dependency, in input order.
            `compatible` is None when the outcome is unknown.
    """
    issues: List[CompatibilityIssue] = []

    for package in packages:
        status, trace = explain(root_license, package.license)

        reason = "; ".join(trace)
        if status is Compatibility.UNKNOWN:
            reason = f"{reason}; Outcome: unknown. Requires manual verification."

        issues.append(CompatibilityIssue(
            package=package.name,
            version=package.version,
            detected_license=format_license(package.license),
            status=status,
            compatible=_COMPATIBLE_FLAG[status],
            reason=reason,
        ))

    return issues
