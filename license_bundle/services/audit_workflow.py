"""
Audit Workflow Module.

This module is the orchestrator shared by the CLI and the HTTP API:
- Resolving the root package and its runtime dependencies.
- Grouping them by license for the listing report.
- Rendering the bundle document with the full license texts.
- Checking every dependency against the root package license.
"""

import logging
from typing import Optional

from license_bundle.models.schemas import (
    BundleResponse,
    CompatibilityResponse,
    ListingResponse,
    PairCompatibilityResponse,
)
from license_bundle.services.licenses.checker import check_packages
from license_bundle.services.licenses.compatibility import explain
from license_bundle.services.licenses.model import format_license, parse_license
from license_bundle.services.licenses.texts import TextTable
from license_bundle.services.reports.bundle import render_bundle
from license_bundle.services.reports.listing import build_groups, render_listing
from license_bundle.services.resolver.load import resolve_packages

logger = logging.getLogger(__name__)


def perform_listing(manifest_path: Optional[str] = None, package: Optional[str] = None) -> ListingResponse:
    """
    Resolves the dependencies and groups them by license.

    Args:
        manifest_path (Optional[str]): Root manifest override.
        package (Optional[str]): Installed distribution to use as root.

    Returns:
        ListingResponse: The root name and the license groups.

    Raises:
        ResolutionFailure: If the dependency graph cannot be resolved.
    """
    root, packages = resolve_packages(manifest_path=manifest_path, package=package)
    return ListingResponse(root=root.name, groups=build_groups(packages))


def perform_listing_text(manifest_path: Optional[str] = None, package: Optional[str] = None) -> str:
    """Same as `perform_listing`, rendered as text lines."""
    _, packages = resolve_packages(manifest_path=manifest_path, package=package)
    return render_listing(packages)


def perform_bundle(
        manifest_path: Optional[str] = None,
        package: Optional[str] = None,
        texts: Optional[TextTable] = None) -> BundleResponse:
    """
    Resolves the dependencies and renders the bundle document.

    Args:
        manifest_path (Optional[str]): Root manifest override.
        package (Optional[str]): Installed distribution to use as root.
        texts (Optional[TextTable]): License text table override.

    Returns:
        BundleResponse: The root name and the document.

    Raises:
        ResolutionFailure: If the dependency graph cannot be resolved.
        LicenseTextError: If a license text is not available.
    """
    root, packages = resolve_packages(manifest_path=manifest_path, package=package)
    document = render_bundle(root.name, packages, texts)
    logger.info("Bundled licenses of %d packages for %s", len(packages), root.name)
    return BundleResponse(root=root.name, document=document)


def perform_check(manifest_path: Optional[str] = None, package: Optional[str] = None) -> CompatibilityResponse:
    """
    Resolves the dependencies and checks each against the root license.

    Args:
        manifest_path (Optional[str]): Root manifest override.
        package (Optional[str]): Installed distribution to use as root.

    Returns:
        CompatibilityResponse: The root license and one issue per dependency.

    Raises:
        ResolutionFailure: If the dependency graph cannot be resolved.
    """
    root, packages = resolve_packages(manifest_path=manifest_path, package=package)
    issues = check_packages(root.license, packages)
    return CompatibilityResponse(
        root=root.name,
        root_license=format_license(root.license),
        issues=issues,
    )


def check_pair(consumer: str, dependency: str) -> PairCompatibilityResponse:
    """
    Runs the compatibility oracle on two declaration strings.

    Args:
        consumer (str): Declared license of the including package.
        dependency (str): Declared license of the included package.

    Returns:
        PairCompatibilityResponse: The outcome and its trace.
    """
    consumer_license = parse_license(consumer)
    dependency_license = parse_license(dependency)
    status, trace = explain(consumer_license, dependency_license)
    return PairCompatibilityResponse(
        consumer=format_license(consumer_license),
        dependency=format_license(dependency_license),
        status=status,
        trace=trace,
    )
