"""
Dependency Resolution Module.

Walks the runtime dependency graph of a root package through installed
distribution metadata and produces one `PackageRecord` per dependency.

The root package comes either from an installed distribution name or from the
`[project]` table of a `pyproject.toml` manifest. Requirements guarded by an
`extra` marker, or by a marker that is false for the running interpreter, are
not followed: only what the root needs at runtime is audited.
"""

import logging
import tomllib
from importlib.metadata import PackageNotFoundError, distribution
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Set, Tuple

from packaging.requirements import InvalidRequirement, Requirement
from packaging.utils import canonicalize_name

from license_bundle.core.config import DEFAULT_MANIFEST
from license_bundle.core.errors import ResolutionFailure
from license_bundle.models.schemas import PackageRecord
from .declared import declared_license, spdx_to_declared

logger = logging.getLogger(__name__)


def _is_runtime_requirement(req: Requirement) -> bool:
    """
    Checks whether a requirement applies to a plain install on this interpreter.

    Args:
        req (Requirement): The parsed requirement.

    Returns:
        bool: False for extras-only or environment-excluded requirements.
    """
    if req.marker is None:
        return True
    return req.marker.evaluate({"extra": ""})


def _record_from_distribution(dist) -> PackageRecord:
    license_text, license_file = declared_license(dist.metadata)
    return PackageRecord(
        name=dist.metadata["Name"],
        version=dist.version,
        license_text=license_text,
        license_file=license_file,
    )


def _find_distribution(name: str):
    try:
        return distribution(name)
    except PackageNotFoundError:
        return None


def _license_from_project(project: Dict[str, Any]) -> Tuple[str, Optional[str]]:
    """
    Reads the license declaration of a `[project]` table.

    Supports both the SPDX string form (`license = "MIT"`) and the legacy
    table form (`license = {text = "..."}` / `license = {file = "..."}`).
    """
    declared = project.get("license")
    license_files = project.get("license-files") or []
    first_file = license_files[0] if license_files else None

    if isinstance(declared, str):
        return spdx_to_declared(declared), first_file
    if isinstance(declared, dict):
        if declared.get("text"):
            return spdx_to_declared(declared["text"]), first_file
        if declared.get("file"):
            return "", declared["file"]
    return "", first_file


def _load_manifest(manifest_path: Path) -> Dict[str, Any]:
    """
    Loads the `[project]` table of a manifest.

    Raises:
        ResolutionFailure: If the file is missing, is not valid TOML, or has
            no named `[project]` table.
    """
    if not manifest_path.is_file():
        raise ResolutionFailure(f"Could not find manifest {manifest_path}")

    try:
        with open(manifest_path, "rb") as file_handle:
            data = tomllib.load(file_handle)
    except (OSError, tomllib.TOMLDecodeError) as e:
        raise ResolutionFailure(f"Could not read manifest {manifest_path}: {e}") from e

    project = data.get("project")
    if not isinstance(project, dict) or not project.get("name"):
        raise ResolutionFailure(f"Manifest {manifest_path} has no [project] name")
    return project


def _root_from_manifest(manifest_path: Path) -> Tuple[PackageRecord, List[str]]:
    project = _load_manifest(manifest_path)
    name = project["name"]

    license_text, license_file = _license_from_project(project)
    root = PackageRecord(
        name=name,
        version=str(project.get("version", "0.0.0")),
        license_text=license_text,
        license_file=license_file,
    )

    dependencies = project.get("dependencies") or []
    for raw in dependencies:
        try:
            Requirement(raw)
        except InvalidRequirement as e:
            raise ResolutionFailure(f"Invalid dependency {raw!r} in {manifest_path}: {e}") from e

    logger.info("Root package %s read from %s", name, manifest_path)
    return root, list(dependencies)


def _root_from_distribution(package: str) -> Tuple[PackageRecord, List[str]]:
    dist = _find_distribution(package)
    if dist is None:
        raise ResolutionFailure(f"Package {package} is not installed")
    logger.info("Root package %s read from installed metadata", package)
    return _record_from_distribution(dist), list(dist.requires or [])


def _walk(root_name: str, requirements: Iterable[str]) -> List[PackageRecord]:
    """
    Collects every runtime dependency reachable from `requirements`.

    Args:
        root_name (str): The root package name, never reported as a dependency.
        requirements (Iterable[str]): The root's requirement strings.

    Returns:
        List[PackageRecord]: The dependencies in depth-first discovery order.
    """
    seen: Set[str] = {canonicalize_name(root_name)}
    result: List[PackageRecord] = []
    to_check = list(reversed(list(requirements)))

    while to_check:
        raw = to_check.pop()
        try:
            req = Requirement(raw)
        except InvalidRequirement:
            logger.warning("Skipping unparseable requirement %r", raw)
            continue

        if not _is_runtime_requirement(req):
            logger.debug("Skipping non-runtime requirement %s", raw)
            continue

        key = canonicalize_name(req.name)
        if key in seen:
            continue
        seen.add(key)

        dist = _find_distribution(req.name)
        if dist is None:
            logger.warning("Dependency %s is not installed, skipping it", req.name)
            continue

        result.append(_record_from_distribution(dist))
        to_check.extend(reversed(list(dist.requires or [])))

    return result


def resolve_packages(
        manifest_path: Optional[str] = None,
        package: Optional[str] = None) -> Tuple[PackageRecord, List[PackageRecord]]:
    """
    Resolves the root package and its transitive runtime dependencies.

    Args:
        manifest_path (Optional[str]): Path of the root `pyproject.toml`.
            Defaults to the configured manifest in the working directory.
        package (Optional[str]): Name of an installed distribution to use as
            root instead of a manifest.

    Returns:
        Tuple[PackageRecord, List[PackageRecord]]: The root record and its
        dependencies (root excluded).

    Raises:
        ResolutionFailure: If the root package cannot be determined.
    """
    if package:
        root, requirements = _root_from_distribution(package)
    else:
        root, requirements = _root_from_manifest(Path(manifest_path or DEFAULT_MANIFEST))

    dependencies = _walk(root.name, requirements)
    logger.info("Resolved %d dependencies for %s", len(dependencies), root.name)
    return root, dependencies
