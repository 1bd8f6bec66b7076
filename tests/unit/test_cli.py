"""
test: cli.py

Runs the command line entry point against the fake installed registry and
checks its output streams and exit codes.
"""

import pytest

from license_bundle import cli
from license_bundle.core.errors import IOFailure


def test_list_prints_groups(demo_manifest, demo_installed, capsys):
    code = cli.main(["--manifest-path", str(demo_manifest), "list"])
    out = capsys.readouterr().out.splitlines()

    assert code == 0
    assert out == ["Apache-2.0: b", "MIT: a", "Unlicensed: c"]


def test_bundle_to_stdout(demo_manifest, demo_installed, capsys):
    code = cli.main(["--manifest-path", str(demo_manifest), "bundle"])
    out = capsys.readouterr().out

    assert code == 0
    assert out.startswith("The demo package uses some third party libraries")
    assert "* a - MIT" in out


def test_bundle_to_file(demo_manifest, demo_installed, tmp_path, capsys):
    target = tmp_path / "THIRD_PARTY.txt"
    code = cli.main(["--manifest-path", str(demo_manifest), "bundle", "-o", str(target)])

    assert code == 0
    assert capsys.readouterr().out == ""
    assert "* b - Apache-2.0" in target.read_text(encoding="utf-8")


def test_bundle_unsupported_license_fails(demo_manifest, demo_installed, FakeDist, capsys):
    demo_installed["c"] = FakeDist("c", License="GPL-3.0")
    code = cli.main(["--manifest-path", str(demo_manifest), "bundle"])
    err = capsys.readouterr().err

    assert code == 1
    assert err.startswith("error: Bundling license GPL-3.0 is not supported yet")


def test_resolution_failure_reported(tmp_path, capsys):
    code = cli.main(["--manifest-path", str(tmp_path / "missing.toml"), "list"])

    assert code == 1
    assert "Could not find manifest" in capsys.readouterr().err


def test_write_failure_is_io_failure(tmp_path):
    with pytest.raises(IOFailure):
        cli._write_output("text", str(tmp_path / "missing-dir" / "out.txt"))


def test_check_exit_codes(demo_manifest, demo_installed, FakeDist, capsys):
    # c has no license: excluded
    code = cli.main(["--manifest-path", str(demo_manifest), "check"])
    out = capsys.readouterr().out

    assert code == 2
    assert "a (MIT): included" in out
    assert "b (Apache-2.0): excluded" in out

    demo_installed["b"] = FakeDist("b", License="X11")
    demo_installed["c"] = FakeDist("c", License="Foo")
    assert cli.main(["--manifest-path", str(demo_manifest), "check"]) == 0


def test_subcommand_required():
    with pytest.raises(SystemExit):
        cli.main([])
