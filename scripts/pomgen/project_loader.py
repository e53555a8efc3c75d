"""Project descriptor loading from ``project.json``.

Turns the JSON descriptor into :class:`ProjectDescriptor` and friends:
coordinates, dependency and repository vectors, profiles, and paths
resolved against the project root.
"""

import json
from pathlib import Path
from typing import Optional

from .errors import ProjectLoadError
from .profiles import merge_profiles
from .project_models import (
    DependencySpec,
    ElementNode,
    Exclusion,
    Extension,
    License,
    MailingList,
    ParentSpec,
    Profile,
    ProjectDescriptor,
    RepositorySpec,
    ScmSpec,
)

DESCRIPTOR_FILE = "project.json"

# Composite profile used when the descriptor does not define its own.
DEFAULT_PROFILE_INCLUDES = ["base", "system", "user", "provided", "dev"]

_DEFAULT_PATHS = {
    "source-paths": ["src"],
    "test-paths": ["test"],
    "resource-paths": ["resources"],
    "java-source-paths": [],
}


def _options(items: list, what: str) -> dict:
    """Return the trailing options map of a ``[coordinate, version, {...}]`` vector."""
    if not items:
        return {}
    if not isinstance(items[-1], dict):
        raise ProjectLoadError(f"Expected an options map at the end of {what}, got {items[-1]!r}")
    return items[-1]


def _parse_exclusion(spec) -> Exclusion:
    if isinstance(spec, str):
        return Exclusion(spec)
    opts = _options(spec[1:], f"exclusion {spec[0]}")
    return Exclusion(spec[0], classifier=opts.get("classifier"), extension=opts.get("extension"))


def _parse_dependency(spec) -> DependencySpec:
    """Parse ``["group/artifact", "version", {options}]`` into a DependencySpec."""
    if isinstance(spec, str):
        spec = [spec]
    if not spec or not isinstance(spec[0], str):
        raise ProjectLoadError(f"Invalid dependency: {spec!r}")
    version = spec[1] if len(spec) > 1 and not isinstance(spec[1], dict) else None
    opts = _options(spec[2:] if version is not None else spec[1:], f"dependency {spec[0]}")
    return DependencySpec(
        coordinate=spec[0],
        version=version,
        classifier=opts.get("classifier"),
        extension=opts.get("extension"),
        scope=opts.get("scope"),
        optional=bool(opts.get("optional", False)),
        exclusions=[_parse_exclusion(e) for e in opts.get("exclusions", [])],
    )


def _parse_repository(spec) -> RepositorySpec:
    """Parse ``["id", "url"]`` or ``["id", {"url": ..., "snapshots": ...}]``."""
    if not isinstance(spec, list) or len(spec) != 2:
        raise ProjectLoadError(f"Invalid repository: {spec!r}")
    repo_id, opts = spec
    if isinstance(opts, str):
        opts = {"url": opts}
    return RepositorySpec(
        id=repo_id,
        url=opts.get("url"),
        snapshots=opts.get("snapshots"),
        releases=opts.get("releases"),
    )


def _parse_element(spec) -> ElementNode:
    """Parse a ``["tag", {attrs}?, child...]`` vector into an ElementNode."""
    if not isinstance(spec, list) or not spec or not isinstance(spec[0], str):
        raise ProjectLoadError(f"Invalid element: {spec!r}")
    tag, *rest = spec
    attrib = {}
    if rest and isinstance(rest[0], dict):
        attrib = {k: str(v) for k, v in rest[0].items()}
        rest = rest[1:]
    children = [c if isinstance(c, str) else _parse_element(c) for c in rest if c is not None]
    return ElementNode(tag, children, attrib)


def _resolve_path(root: Path, path: Optional[str]) -> Optional[str]:
    if path is None:
        return None
    return str(root / path)


def _resolve_paths(root: Path, paths) -> list[str]:
    if isinstance(paths, str):
        paths = [paths]
    return [_resolve_path(root, p) for p in paths or []]


def _parse_profile(root: Path, name: str, data) -> Profile:
    if isinstance(data, list):
        return Profile(includes=list(data))
    if not isinstance(data, dict):
        raise ProjectLoadError(f"Invalid profile '{name}': {data!r}")
    return Profile(
        dependencies=[_parse_dependency(d) for d in data.get("dependencies", [])],
        repositories=[_parse_repository(r) for r in data.get("repositories", [])],
        source_paths=_resolve_paths(root, data.get("source-paths")),
        java_source_paths=_resolve_paths(root, data.get("java-source-paths")),
        test_paths=_resolve_paths(root, data.get("test-paths")),
        resource_paths=_resolve_paths(root, data.get("resource-paths")),
    )


def _parse_license(data):
    if data is None or isinstance(data, str):
        return data
    return License(
        name=data.get("name"),
        url=data.get("url"),
        distribution=data.get("distribution"),
        comments=data.get("comments"),
    )


def _parse_mailing_list(data) -> Optional[MailingList]:
    if not data:
        return None
    return MailingList(
        name=data.get("name"),
        subscribe=data.get("subscribe"),
        unsubscribe=data.get("unsubscribe"),
        post=data.get("post"),
        archive=data.get("archive"),
        other_archives=list(data.get("other-archives", [])),
    )


def _parse_scm(root: Path, data) -> Optional[ScmSpec]:
    if not data:
        return None
    return ScmSpec(
        name=data.get("name"),
        dir=_resolve_path(root, data.get("dir")),
        url=data.get("url"),
        connection=data.get("connection"),
        tag=data.get("tag"),
        developer_connection=data.get("developer-connection") or data.get("developerConnection"),
    )


def _parse_parent(data) -> Optional[ParentSpec]:
    if not data:
        return None
    version = data[1] if len(data) > 1 and not isinstance(data[1], dict) else None
    opts = _options(data[2:] if version is not None else data[1:], f"parent {data[0]}")
    return ParentSpec(data[0], version=version, relative_path=opts.get("relative-path"))


def parse_project(data: dict, root: Path) -> ProjectDescriptor:
    """Build a ProjectDescriptor from decoded ``project.json`` data.

    ``group`` defaults to ``name``; the ``default`` profile is merged unless
    ``active-profiles`` says otherwise.

    Args:
        data: Decoded JSON object.
        root: Absolute project directory that relative paths resolve against.

    Returns:
        A populated ProjectDescriptor with its active profiles merged.
    """
    for key in ("name", "version"):
        if not data.get(key):
            raise ProjectLoadError(f"Project descriptor is missing required '{key}'")

    profiles = {
        name: _parse_profile(root, name, value)
        for name, value in data.get("profiles", {}).items()
    }
    profiles.setdefault("default", Profile(includes=list(DEFAULT_PROFILE_INCLUDES)))

    paths = {key: data.get(key, default) for key, default in _DEFAULT_PATHS.items()}
    project = ProjectDescriptor(
        name=data["name"],
        group=data.get("group") or data["name"],
        version=data["version"],
        root=str(root),
        description=data.get("description"),
        packaging=data.get("packaging"),
        classifier=data.get("classifier"),
        url=data.get("url"),
        license=_parse_license(data.get("license")),
        mailing_list=_parse_mailing_list(data.get("mailing-list")),
        scm=_parse_scm(root, data.get("scm")),
        parent=_parse_parent(data.get("parent")),
        dependencies=[_parse_dependency(d) for d in data.get("dependencies", [])],
        repositories=[_parse_repository(r) for r in data.get("repositories", [])],
        extensions=[Extension(e[0], e[1] if len(e) > 1 else None) for e in data.get("extensions", [])],
        source_paths=_resolve_paths(root, paths["source-paths"]),
        java_source_paths=_resolve_paths(root, paths["java-source-paths"]),
        test_paths=_resolve_paths(root, paths["test-paths"]),
        resource_paths=_resolve_paths(root, paths["resource-paths"]),
        target_path=_resolve_path(root, data.get("target-path", "target")),
        compile_path=_resolve_path(root, data.get("compile-path", "target/classes")),
        pom_addition=_parse_element(data["pom-addition"]) if data.get("pom-addition") else None,
        profiles=profiles,
    )
    return merge_profiles(project, data.get("active-profiles", ["default"]))


def load_project(path: Path) -> ProjectDescriptor:
    """Load a project descriptor from a directory or a ``project.json`` path.

    Raises:
        ProjectLoadError: If the file is missing, is not valid JSON, or
            lacks required fields.
    """
    path = Path(path)
    descriptor = path / DESCRIPTOR_FILE if path.is_dir() else path
    try:
        with open(descriptor, encoding="utf-8") as f:
            data = json.load(f)
    except FileNotFoundError:
        raise ProjectLoadError(f"No {DESCRIPTOR_FILE} found at {descriptor}") from None
    except json.JSONDecodeError as e:
        raise ProjectLoadError(f"Invalid JSON in {descriptor}: {e}") from e
    if not isinstance(data, dict):
        raise ProjectLoadError(f"{descriptor} must contain a JSON object")
    return parse_project(data, descriptor.resolve().parent)
