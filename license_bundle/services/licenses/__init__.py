"""
License core: data model, compatibility engine, text repository and grouping.
"""

from .model import License, LicenseKind, UNSPECIFIED, parse_license, format_license
from .compatibility import Compatibility, can_include, explain
from .texts import full_text, indent_text
from .aggregator import group_by_license, sorted_groups

__all__ = [
    "License",
    "LicenseKind",
    "UNSPECIFIED",
    "parse_license",
    "format_license",
    "Compatibility",
    "can_include",
    "explain",
    "full_text",
    "indent_text",
    "group_by_license",
    "sorted_groups",
]
