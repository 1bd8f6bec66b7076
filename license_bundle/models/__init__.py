from .schemas import (
    PackageRecord,
    PackageEntry,
    LicenseGroup,
    CompatibilityIssue,
    ListingResponse,
    BundleResponse,
    CompatibilityResponse,
    PairCompatibilityResponse,
)

__all__ = [
    "PackageRecord",
    "PackageEntry",
    "LicenseGroup",
    "CompatibilityIssue",
    "ListingResponse",
    "BundleResponse",
    "CompatibilityResponse",
    "PairCompatibilityResponse",
]
