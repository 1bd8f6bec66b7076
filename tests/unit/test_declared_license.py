"""
test: services/resolver/declared.py

Unit tests for reading license declarations out of distribution metadata:
SPDX expressions, the legacy License field, trove classifiers and license files.
"""

import pytest

from license_bundle.services.licenses.model import parse_license
from license_bundle.services.resolver.declared import (
    declared_license,
    normalize_symbol,
    spdx_to_declared,
)


def test_normalize_symbol_synonyms():
    assert normalize_symbol("GPL-3.0-or-later") == "GPL-3.0+"
    assert normalize_symbol(" LGPL-2.1-only ") == "LGPL-2.1"
    assert normalize_symbol("MIT") == "MIT"


@pytest.mark.parametrize("expr, expected", [
    ("MIT", "MIT"),
    ("GPL-2.0-or-later", "GPL-2.0+"),
    ("", ""),
    ("   ", ""),
    ("MIT/Apache-2.0", "MIT/Apache-2.0"),
])
def test_spdx_to_declared_simple(expr, expected):
    assert spdx_to_declared(expr) == expected


def test_spdx_or_becomes_alternatives():
    declared = spdx_to_declared("MIT OR Apache-2.0")
    assert parse_license(declared) == parse_license("Apache-2.0/MIT")


def test_spdx_grouped_or_is_flattened():
    declared = spdx_to_declared("(MIT OR Apache-2.0) OR GPL-3.0-only")
    assert parse_license(declared) == parse_license("MIT/Apache-2.0/GPL-3.0")


def test_spdx_or_containing_and_is_kept_verbatim():
    expr = "(MIT AND Apache-2.0) OR GPL-3.0"
    assert spdx_to_declared(expr) == expr


def test_spdx_and_is_kept_verbatim():
    assert spdx_to_declared("MIT AND Apache-2.0") == "MIT AND Apache-2.0"


def test_spdx_parse_error_is_kept_verbatim(monkeypatch):
    def boom(*_args, **_kwargs):
        raise ValueError("bad expression")

    monkeypatch.setattr("license_bundle.services.resolver.declared.licensing.parse", boom)
    assert spdx_to_declared("MIT OR (") == "MIT OR ("


def test_license_expression_field_wins(FakeDist):
    dist = FakeDist("x", License_Expression="MIT", License="Apache-2.0")
    assert declared_license(dist.metadata) == ("MIT", None)


def test_license_field_used_when_short(FakeDist):
    dist = FakeDist("x", License="BSD-3-Clause")
    assert declared_license(dist.metadata) == ("BSD-3-Clause", None)


def test_long_license_field_falls_back_to_classifiers(FakeDist):
    dist = FakeDist(
        "x",
        License="Permission is hereby granted, free of charge, to any person obtaining a copy " * 3,
        Classifier=["Programming Language :: Python", "License :: OSI Approved :: MIT License"],
    )
    assert declared_license(dist.metadata) == ("MIT", None)


def test_unknown_license_field_is_ignored(FakeDist):
    dist = FakeDist("x", License="UNKNOWN")
    assert declared_license(dist.metadata) == ("", None)


def test_several_classifiers_become_alternatives(FakeDist):
    dist = FakeDist("x", Classifier=[
        "License :: OSI Approved :: Apache Software License",
        "License :: OSI Approved :: MIT License",
    ])
    text, _ = declared_license(dist.metadata)
    assert parse_license(text) == parse_license("MIT/Apache-2.0")


def test_unmapped_classifier_uses_its_last_segment(FakeDist):
    dist = FakeDist("x", Classifier=["License :: OSI Approved :: BSD License"])
    assert declared_license(dist.metadata) == ("BSD License", None)


def test_license_file_reported(FakeDist):
    dist = FakeDist("x", License_File=["LICENSE.txt", "NOTICE"])
    assert declared_license(dist.metadata) == ("", "LICENSE.txt")


def test_no_declaration(FakeDist):
    assert declared_license(FakeDist("x").metadata) == ("", None)
