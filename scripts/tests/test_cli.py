"""Tests for cli.py — end-to-end generation from project.json."""

import pytest

from pomgen.cli import generate, main, parse_args
from pomgen.pom_writer import SNAPSHOT_OVERRIDE_ENV

PROJECT = {
    "name": "demo",
    "group": "com.example",
    "version": "1.0.0",
    "dependencies": [["org.clojure/clojure", "1.11.1"]],
}


class TestParseArgs:
    def test_defaults(self):
        args = parse_args([])
        assert str(args.project) == "."
        assert args.output == "pom.xml"
        assert args.properties is None
        assert not args.dry_run
        assert not args.no_disclaimer


class TestGenerate:
    def test_writes_pom(self, write_project, tmp_path, capsys):
        path = generate(write_project(PROJECT))
        assert path == str((tmp_path / "pom.xml").resolve())
        assert "<artifactId>clojure</artifactId>" in (tmp_path / "pom.xml").read_text()
        assert "Wrote" in capsys.readouterr().out

    def test_writes_properties(self, write_project, tmp_path):
        generate(write_project(PROJECT), properties_location="pom.properties")
        assert "artifactId=demo" in (tmp_path / "pom.properties").read_text(encoding="iso-8859-1")

    def test_custom_location_creates_directories(self, write_project, tmp_path):
        generate(write_project(PROJECT), pom_location="target/pom.xml", disclaimer=False)
        content = (tmp_path / "target" / "pom.xml").read_text()
        assert "autogenerated" not in content

    def test_dry_run(self, write_project, tmp_path, capsys):
        assert generate(write_project(PROJECT), properties_location="pom.properties", dry_run=True) is None
        out = capsys.readouterr().out
        assert "<groupId>com.example</groupId>" in out
        assert "version=1.0.0" in out
        assert not (tmp_path / "pom.xml").exists()


class TestMain:
    def test_success(self, write_project, tmp_path):
        main([str(write_project(PROJECT))])
        assert (tmp_path / "pom.xml").exists()

    def test_snapshot_conflict_exits(self, write_project, tmp_path, capsys, monkeypatch):
        monkeypatch.delenv(SNAPSHOT_OVERRIDE_ENV, raising=False)
        root = write_project({**PROJECT, "dependencies": [["com.example/lib", "0.1.0-SNAPSHOT"]]})
        with pytest.raises(SystemExit) as exc_info:
            main([str(root)])
        assert exc_info.value.code == 1
        err = capsys.readouterr().err
        assert "ERROR: Release versions may not depend upon snapshots" in err
        assert SNAPSHOT_OVERRIDE_ENV in err
        assert not (tmp_path / "pom.xml").exists()

    def test_snapshot_conflict_overridden(self, write_project, tmp_path, monkeypatch):
        monkeypatch.setenv(SNAPSHOT_OVERRIDE_ENV, "1")
        root = write_project({**PROJECT, "dependencies": [["com.example/lib", "0.1.0-SNAPSHOT"]]})
        main([str(root)])
        assert (tmp_path / "pom.xml").exists()

    def test_missing_descriptor_exits(self, tmp_path, capsys):
        with pytest.raises(SystemExit):
            main([str(tmp_path)])
        assert "ERROR: No project.json" in capsys.readouterr().err
