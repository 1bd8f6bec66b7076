"""
Error Types Module.

All failures that can propagate out of the audit services derive from
`LicenseAuditError`, so the CLI and the HTTP layer can report them uniformly.
The compatibility engine never raises: an undecidable pair is represented by
`Compatibility.UNKNOWN`, not by an exception.
"""


class LicenseAuditError(Exception):
    """Base class for every failure raised by the audit services."""


class LicenseTextError(LicenseAuditError):
    """
    Raised when the full text of a license cannot be provided.

    Attributes:
        license: The License value the text was requested for.
    """

    def __init__(self, license_, message: str):
        super().__init__(message)
        self.license = license_


class UnsupportedLicenseText(LicenseTextError):
    """The license is known but no text is embedded for it yet."""

    def __init__(self, license_):
        super().__init__(
            license_,
            f"Bundling license {license_} is not supported yet. "
            "If you feel like adding support you simply need to add a text file "
            "under services/licenses/license_texts and register it for this license.",
        )


class UnrecognizedLicense(LicenseTextError):
    """The license is a custom identifier, so no text can be derived."""

    def __init__(self, license_):
        super().__init__(
            license_,
            f"Bundling license {license_} is not supported, this is not a known "
            "OSI license (or the list of licenses is out of date)",
        )


class InvalidCompositeRequest(LicenseTextError):
    """Text was requested for a Multiple or Unspecified license."""

    def __init__(self, license_):
        kind = "multiple licenses" if license_.is_multiple else "unspecified license"
        super().__init__(license_, f"Bundling {kind} happens at a higher level")


class ResolutionFailure(LicenseAuditError):
    """The dependency graph of the root package could not be resolved."""


class IOFailure(LicenseAuditError):
    """A report could not be written to its destination."""
