"""Shared test fixtures for the pomgen test suite."""

import json
import textwrap
from pathlib import Path

import pytest

from pomgen.project_models import (
    DependencySpec,
    Profile,
    ProjectDescriptor,
    RepositorySpec,
)


ORIGIN_CONFIG = """\
    [core]
        repositoryformatversion = 0
    [remote "origin"]
        url = git@github.com:alice/proj.git
        fetch = +refs/heads/*:refs/remotes/origin/*
    [branch "main"]
        remote = origin
"""


@pytest.fixture
def make_git_dir(tmp_path):
    """Factory fixture that lays out a ``.git`` directory and returns its path."""
    def _make(head="ref: refs/heads/main\n", refs=None, config=ORIGIN_CONFIG, base: Path = None):
        git_dir = (base or tmp_path) / ".git"
        git_dir.mkdir(parents=True)
        if head is not None:
            (git_dir / "HEAD").write_text(head)
        for ref, sha in (refs or {}).items():
            ref_file = git_dir / ref
            ref_file.parent.mkdir(parents=True, exist_ok=True)
            ref_file.write_text(sha)
        if config is not None:
            (git_dir / "config").write_text(textwrap.dedent(config))
        return git_dir
    return _make


@pytest.fixture
def write_project(tmp_path):
    """Factory fixture that writes a project.json to a temp directory and returns the directory."""
    def _write(data: dict) -> Path:
        (tmp_path / "project.json").write_text(json.dumps(data), encoding="utf-8")
        return tmp_path
    return _write


@pytest.fixture
def simple_project(tmp_path):
    """A minimal release project rooted in an empty temp directory."""
    root = str(tmp_path)
    return ProjectDescriptor(
        name="demo",
        group="com.example",
        version="1.0.0",
        root=root,
        source_paths=[f"{root}/src"],
        test_paths=[f"{root}/test"],
        target_path=f"{root}/target",
        compile_path=f"{root}/target/classes",
        dependencies=[
            DependencySpec("org.clojure/clojure", "1.11.1"),
        ],
    )


@pytest.fixture
def profiled_project(tmp_path):
    """A project whose provided/dev/test profiles contribute dependencies and paths."""
    root = str(tmp_path)
    return ProjectDescriptor(
        name="webapp",
        group="com.example",
        version="2.0.0-SNAPSHOT",
        root=root,
        source_paths=[f"{root}/src"],
        test_paths=[f"{root}/test"],
        resource_paths=[f"{root}/resources"],
        repositories=[RepositorySpec("clojars", "https://repo.clojars.org/")],
        dependencies=[
            DependencySpec("org.clojure/clojure", "1.11.1"),
            DependencySpec("ring/ring-core", "1.12.0", scope="runtime"),
        ],
        profiles={
            "provided": Profile(dependencies=[
                DependencySpec("javax.servlet/servlet-api", "2.5"),
                DependencySpec("ring/ring-core", "1.9.0"),
            ]),
            "dev": Profile(
                dependencies=[DependencySpec("ring/ring-mock", "0.4.0")],
                resource_paths=[f"{root}/dev-resources"],
            ),
            "test": Profile(test_paths=[f"{root}/test-integration"]),
            "default": Profile(includes=["base", "system", "user", "provided", "dev"]),
        },
        active_profiles=("provided", "dev"),
    )
