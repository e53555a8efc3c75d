"""POM and ``pom.properties`` document assembly.

Normalizes a project descriptor (profile layers, relative paths), checks
release integrity, renders the ``<project>`` element tree to indented XML
and writes the results to disk.
"""

import os
import xml.etree.ElementTree as ET
from dataclasses import replace
from pathlib import Path
from typing import Mapping, Optional

from . import git_scm
from .errors import SnapshotDependencyError
from .pom_tags import xml_tags
from .profiles import SPECIAL_PROFILES, apply_profiles, merge_profiles, unmerge_profiles
from .project_models import ElementNode, ProjectDescriptor, ProjectViews

# Any non-empty value lets a release version depend on snapshots.
SNAPSHOT_OVERRIDE_ENV = "POMGEN_SNAPSHOTS_IN_RELEASE"

# Comment written as the first line of pom.properties.
PROPERTIES_HEADER = "pomgen"

# Notice placed at the bottom of generated POM files.
DISCLAIMER = (
    "\n<!-- This file was autogenerated by pomgen.\n"
    "  Please do not edit it directly; instead edit project.json and regenerate it.\n"
    "  It should not be considered canonical data. -->\n"
)

XML_DECLARATION = '<?xml version="1.0" encoding="UTF-8"?>\n'

# Descriptor fields holding filesystem paths, singular or lists.
_PATH_FIELDS = (
    "target_path",
    "compile_path",
    "source_paths",
    "test_paths",
    "resource_paths",
    "java_source_paths",
)


def relativize(project: ProjectDescriptor) -> ProjectDescriptor:
    """Strip the ``<root>/`` prefix from every configured path.

    Paths outside the root are returned unchanged.
    """
    if not project.root:
        return project
    prefix = project.root.rstrip(os.sep) + os.sep

    def strip(path):
        if path and path.startswith(prefix):
            return path[len(prefix):]
        return path

    changes = {}
    for name in _PATH_FIELDS:
        value = getattr(project, name)
        if isinstance(value, (list, tuple)):
            changes[name] = [strip(p) for p in value]
        else:
            changes[name] = strip(value)
    return replace(project, **changes)


def check_for_snapshot_deps(project: ProjectDescriptor, environ: Optional[Mapping[str, str]] = None):
    """Refuse to generate a release POM that depends on snapshots.

    Args:
        project: The project, with its active profiles materialized.
        environ: Environment mapping consulted for the override flag
            (defaults to ``os.environ``).

    Raises:
        SnapshotDependencyError: If the project version is a release, the
            override flag is unset, and a dependency version is a snapshot.
    """
    environ = os.environ if environ is None else environ
    if project.is_snapshot or environ.get(SNAPSHOT_OVERRIDE_ENV):
        return
    offending = [
        f"{d.group_id}/{d.artifact_id}:{d.version}"
        for d in project.dependencies
        if d.version and "SNAPSHOT" in d.version
    ]
    if offending:
        raise SnapshotDependencyError(
            "Release versions may not depend upon snapshots: "
            + ", ".join(offending)
            + f"\nFreeze snapshots to dated versions or set the {SNAPSHOT_OVERRIDE_ENV}"
            " environment variable to override.",
            offending,
        )


def profile_views(project: ProjectDescriptor) -> ProjectViews:
    """Materialize the default, provided and test views of a project."""
    def reprofile(names):
        return relativize(apply_profiles(merge_profiles(project, names)))

    return ProjectViews(
        project=relativize(apply_profiles(project)),
        provided=reprofile(["provided"]),
        test=reprofile(["provided", "dev", "test", "default"]),
    )


def to_element(node: ElementNode) -> ET.Element:
    """Convert an ``ElementNode`` tree to an ElementTree element."""
    elem = ET.Element(node.tag, node.attrib)
    last = None
    for child in node.children:
        if isinstance(child, ElementNode):
            last = to_element(child)
            elem.append(last)
        elif last is None:
            elem.text = (elem.text or "") + child
        else:
            last.tail = (last.tail or "") + child
    return elem


def render_xml(node: ElementNode) -> str:
    """Serialize an element tree to indented XML with a UTF-8 declaration."""
    root = to_element(node)
    ET.indent(root, space="  ")
    return XML_DECLARATION + ET.tostring(root, encoding="unicode") + "\n"


def make_pom(
    project: ProjectDescriptor,
    disclaimer: bool = False,
    environ: Optional[Mapping[str, str]] = None,
) -> str:
    """Generate ``pom.xml`` content for a project.

    Args:
        project: Descriptor as produced by the loader, profiles possibly merged.
        disclaimer: Whether to append the "autogenerated" notice.
        environ: Environment mapping for the snapshot override flag.

    Returns:
        The complete POM document as a string.

    Raises:
        SnapshotDependencyError: See :func:`check_for_snapshot_deps`.
    """
    project = unmerge_profiles(project, SPECIAL_PROFILES)
    check_for_snapshot_deps(apply_profiles(project), environ)
    pom = render_xml(xml_tags("project", profile_views(project)))
    if disclaimer:
        pom += DISCLAIMER
    return pom


def _escape_property(text: str, is_key: bool) -> str:
    """Escape a key or value the way ``java.util.Properties.store`` does."""
    out = []
    for i, ch in enumerate(text):
        if ch == " ":
            out.append("\\ " if is_key or i == 0 else " ")
        elif ch == "\t":
            out.append("\\t")
        elif ch == "\n":
            out.append("\\n")
        elif ch == "\r":
            out.append("\\r")
        elif ch == "\f":
            out.append("\\f")
        elif ch in "\\=:#!":
            out.append("\\" + ch)
        elif ord(ch) < 0x20 or ord(ch) > 0x7E:
            out.append("".join(f"\\u{unit:04X}" for unit in _utf16_units(ch)))
        else:
            out.append(ch)
    return "".join(out)


def _utf16_units(ch: str) -> list[int]:
    data = ch.encode("utf-16-be")
    return [int.from_bytes(data[i:i + 2], "big") for i in range(0, len(data), 2)]


def make_pom_properties(project: ProjectDescriptor) -> str:
    """Generate ``pom.properties`` content: version, groupId, artifactId, revision.

    ``revision`` is the current git commit and is left out when the project
    has no readable git metadata.
    """
    properties = {
        "version": project.version,
        "groupId": project.group,
        "artifactId": project.name,
    }
    alternate_dir = project.scm.dir if project.scm else None
    revision = git_scm.read_revision(project.root, alternate_dir)
    if revision:
        properties["revision"] = revision

    lines = [f"#{PROPERTIES_HEADER}"]
    for key, value in properties.items():
        lines.append(f"{_escape_property(key, True)}={_escape_property(value, False)}")
    lines.append("")
    return "\n".join(lines)


def write_pom(
    project: ProjectDescriptor,
    pom_location: str = "pom.xml",
    disclaimer: bool = True,
    environ: Optional[Mapping[str, str]] = None,
) -> str:
    """Write ``pom.xml`` relative to the project root.

    Returns:
        The absolute path of the written file.
    """
    pom = make_pom(project, disclaimer=disclaimer, environ=environ)
    return _write(Path(project.root) / pom_location, pom, "utf-8")


def write_pom_properties(project: ProjectDescriptor, location: str) -> str:
    """Write ``pom.properties`` relative to the project root and return its absolute path."""
    return _write(Path(project.root) / location, make_pom_properties(project), "iso-8859-1")


def _write(path: Path, content: str, encoding: str) -> str:
    """Write content to a file, creating parent directories as needed."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding=encoding)
    resolved = str(path.resolve())
    print(f"Wrote {resolved}")
    return resolved
