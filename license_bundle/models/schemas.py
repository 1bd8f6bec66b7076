"""
Schemas Module.

This module defines the Pydantic models shared by the resolver, the reports
and the HTTP API: resolved package records, license groups, compatibility
issues and the response payloads built from them.
"""

from typing import List, Optional, Tuple
from pydantic import BaseModel, ConfigDict

from license_bundle.services.licenses.compatibility import Compatibility
from license_bundle.services.licenses.model import License, parse_license

# ------------------------------------------------------------------
# COMPONENT MODELS
# ------------------------------------------------------------------

class PackageRecord(BaseModel):
    """
    A resolved package as supplied by the dependency resolver.

    Attributes:
        name (str): The distribution name.
        version (str): The installed version.
        license_text (str): The declared license string ("" when none).
        license_file (Optional[str]): A declared license file, used when no
            license string is declared.
    """
    model_config = ConfigDict(frozen=True)

    name: str
    version: str
    license_text: str = ""
    license_file: Optional[str] = None

    @property
    def identity(self) -> Tuple[str, str]:
        return (self.name, self.version)

    @property
    def license(self) -> License:
        """The parsed license: text first, then file, else Unspecified."""
        if self.license_text.strip():
            return parse_license(self.license_text)
        if self.license_file:
            return License.file(self.license_file)
        return License.unspecified()


class PackageEntry(BaseModel):
    """
    A package as shown in a report.

    Attributes:
        name (str): The distribution name.
        version (str): The installed version.
    """
    name: str
    version: str


class LicenseGroup(BaseModel):
    """
    Packages sharing one license.

    Attributes:
        license (str): The canonical license display string.
        packages (List[PackageEntry]): Packages in resolution order.
    """
    license: str
    packages: List[PackageEntry]


class CompatibilityIssue(BaseModel):
    """
    Outcome of checking one dependency against the root package license.

    Attributes:
        package (str): The dependency name.
        version (str): The dependency version.
        detected_license (str): The dependency's canonical license string.
        status (Compatibility): included / excluded / unknown.
        compatible (Optional[bool]): True, False, or None when undecidable.
        reason (str): Trace of the rules applied.
    """
    package: str
    version: str
    detected_license: str
    status: Compatibility
    compatible: Optional[bool]
    reason: str


# ------------------------------------------------------------------
# RESPONSE MODELS
# ------------------------------------------------------------------

class ListingResponse(BaseModel):
    """
    Packages grouped by license.

    Attributes:
        root (str): The root package name.
        groups (List[LicenseGroup]): Groups ordered by license string.
    """
    root: str
    groups: List[LicenseGroup]


class BundleResponse(BaseModel):
    """
    The rendered bundle document.

    Attributes:
        root (str): The root package name.
        document (str): Full document text, license texts included.
    """
    root: str
    document: str


class CompatibilityResponse(BaseModel):
    """
    Per-dependency compatibility against the root license.

    Attributes:
        root (str): The root package name.
        root_license (str): The root package's canonical license string.
        issues (List[CompatibilityIssue]): One entry per dependency.
    """
    root: str
    root_license: str
    issues: List[CompatibilityIssue]


class PairCompatibilityResponse(BaseModel):
    """
    Outcome of the compatibility oracle for a single pair of declarations.

    Attributes:
        consumer (str): Canonical consumer license string.
        dependency (str): Canonical dependency license string.
        status (Compatibility): included / excluded / unknown.
        trace (List[str]): Rules applied, innermost first.
    """
    consumer: str
    dependency: str
    status: Compatibility
    trace: List[str]
