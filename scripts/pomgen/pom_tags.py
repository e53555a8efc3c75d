"""POM element generators.

Maps descriptor fields onto ``ElementNode`` fragments. :func:`xml_tags` is
the single entry point: it dispatches on the semantic tag name (kebab-case,
as the field is named in the descriptor) to a registered handler, or
falls back to the default leaf rule. Every handler returns ``None`` for a
value that should not appear in the POM, and ``None`` children are dropped
when a node is built.
"""

import re
from typing import Callable, Optional

from . import git_scm
from .dependency_scoping import consolidate_dependencies
from .project_models import (
    DependencySpec,
    ElementNode,
    Exclusion,
    License,
    ProjectDescriptor,
    ProjectViews,
    ScmSpec,
    split_coordinate,
)

POM_NAMESPACE = "http://maven.apache.org/POM/4.0.0"
POM_SCHEMA_LOCATION = f"{POM_NAMESPACE} http://maven.apache.org/xsd/maven-4.0.0.xsd"
XSI_NAMESPACE = "http://www.w3.org/2001/XMLSchema-instance"

# Plugin used to register source roots beyond the single <sourceDirectory>.
BUILD_HELPER_GROUP_ID = "org.codehaus.mojo"
BUILD_HELPER_ARTIFACT_ID = "build-helper-maven-plugin"
BUILD_HELPER_VERSION = "1.7"

_HANDLERS: dict[str, Callable] = {}


def register(*tags: str):
    """Register a handler for one or more semantic tag names."""
    def decorator(fn):
        for tag in tags:
            _HANDLERS[tag] = fn
        return fn
    return decorator


def xml_tags(tag: str, value) -> Optional[ElementNode]:
    """Convert one descriptor field into a POM element.

    Args:
        tag: Semantic tag name, e.g. ``group-id``, ``dependencies`` or ``build``.
        value: The field value; its expected shape depends on ``tag``.

    Returns:
        The generated element, or ``None`` if nothing should be rendered.
    """
    handler = _HANDLERS.get(tag, _default_tag)
    return handler(tag, value)


def camelize(name: str) -> str:
    """Convert a kebab- or snake-case name to camelCase (``group-id`` → ``groupId``)."""
    return re.sub(r"[-_](\w)", lambda m: m.group(1).upper(), name)


def singularize(name: str) -> str:
    if name.endswith("ies"):
        return name[:-3] + "y"
    if name.endswith("s"):
        return name[:-1]
    return name


def node(tag: str, *children, attrib: dict = None) -> ElementNode:
    """Build an element, dropping absent children."""
    return ElementNode(tag, [c for c in children if c is not None], dict(attrib or {}))


def _text(value) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def _default_tag(tag: str, value) -> Optional[ElementNode]:
    """Render ``<camelTag>value</camelTag>``, or nothing for a falsy value.

    A list or a nested element becomes the children of the wrapper, which is
    omitted when none of them survive.
    """
    if not value:
        return None
    if isinstance(value, ElementNode):
        return node(camelize(tag), value)
    if isinstance(value, (list, tuple)):
        children = [c for c in value if c is not None]
        return node(camelize(tag), *children) if children else None
    return node(camelize(tag), _text(value))


@register("dependencies", "repositories", "extensions")
def _list_tag(tag: str, values) -> Optional[ElementNode]:
    """Wrap one child per item, each generated under the singular tag name."""
    item_tag = singularize(tag)
    children = [xml_tags(item_tag, v) for v in values or []]
    return _default_tag(tag, children)


def _group_and_artifact(coordinate: str) -> list:
    group_id, artifact_id = split_coordinate(coordinate)
    return [xml_tags("group-id", group_id), xml_tags("artifact-id", artifact_id)]


@register("dependency")
def _dependency_tag(_, dep: DependencySpec) -> ElementNode:
    return node(
        "dependency",
        *_group_and_artifact(dep.coordinate),
        xml_tags("version", dep.version),
        xml_tags("optional", dep.optional),
        xml_tags("classifier", dep.classifier),
        xml_tags("type", dep.extension),
        xml_tags("exclusions", dep.exclusions),
        xml_tags("scope", dep.scope),
    )


@register("exclusions")
def _exclusions_tag(_, values) -> Optional[ElementNode]:
    if not values:
        return None
    exclusions = []
    for spec in values:
        if isinstance(spec, str):
            spec = Exclusion(spec)
        exclusions.append(node(
            "exclusion",
            *_group_and_artifact(spec.coordinate),
            xml_tags("classifier", spec.classifier),
            xml_tags("type", spec.extension),
        ))
    return node("exclusions", *exclusions)


def _enabled(flag: Optional[bool]) -> str:
    return _text(True if flag is None else bool(flag))


@register("repository")
def _repository_tag(_, repo) -> ElementNode:
    return node(
        "repository",
        xml_tags("id", repo.id),
        xml_tags("url", repo.url),
        node("snapshots", xml_tags("enabled", _enabled(repo.snapshots))),
        node("releases", xml_tags("enabled", _enabled(repo.releases))),
    )


@register("extension")
def _extension_tag(_, ext) -> ElementNode:
    group_id, artifact_id = split_coordinate(ext.coordinate)
    return node(
        "extension",
        xml_tags("artifact-id", artifact_id),
        xml_tags("group-id", group_id),
        xml_tags("version", ext.version),
    )


@register("license")
def _license_tag(_, value) -> Optional[ElementNode]:
    if not value:
        return None
    if isinstance(value, str):
        value = License(name=value)
    fields = [xml_tags(key, getattr(value, key)) for key in ("name", "url", "distribution", "comments")]
    fields = [f for f in fields if f is not None]
    if not fields:
        return None
    return node("licenses", node("license", *fields))


@register("mailing-list")
def _mailing_list_tag(_, ml) -> Optional[ElementNode]:
    if not ml:
        return None
    other_archives = [xml_tags("other-archive", a) for a in ml.other_archives]
    mailing_list = _default_tag("mailing-list", [
        xml_tags("name", ml.name),
        xml_tags("subscribe", ml.subscribe),
        xml_tags("unsubscribe", ml.unsubscribe),
        xml_tags("post", ml.post),
        xml_tags("archive", ml.archive),
        xml_tags("other-archives", other_archives),
    ])
    return _default_tag("mailing-lists", mailing_list)


@register("parent")
def _parent_tag(_, parent) -> Optional[ElementNode]:
    if not parent:
        return None
    group_id, artifact_id = split_coordinate(parent.coordinate)
    return node(
        "parent",
        xml_tags("artifact-id", artifact_id),
        xml_tags("group-id", group_id),
        xml_tags("version", parent.version),
        xml_tags("relative-path", parent.relative_path),
    )


@register("scm")
def _scm_tag(_, scm) -> Optional[ElementNode]:
    """Render the four POM scm fields of an :class:`ScmSpec` or :class:`ScmInfo`."""
    if not scm:
        return None
    return _default_tag("scm", [
        xml_tags("connection", scm.connection),
        xml_tags("developer-connection", scm.developer_connection),
        xml_tags("tag", scm.tag),
        xml_tags("url", scm.url),
    ])


def is_explicit_scm(scm: Optional[ScmSpec]) -> bool:
    """Whether the descriptor's scm section replaces auto-detection."""
    if scm is None:
        return False
    if scm.name and scm.name != "auto":
        return True
    return any((scm.url, scm.connection, scm.tag, scm.developer_connection))


def scm_info(project: ProjectDescriptor):
    """Return the SCM data to render: the explicit section, or detected git info."""
    if is_explicit_scm(project.scm):
        return project.scm
    alternate_dir = project.scm.dir if project.scm else None
    return git_scm.make_git_scm(git_scm.resolve_git_dir(project.root, alternate_dir))


def _resource_tags(resources: list, tag: str) -> Optional[ElementNode]:
    return xml_tags(f"{tag}s", [node(tag, xml_tags("directory", r)) for r in resources])


def _build_helper_execution(goal: str, phase: str, sources: list) -> Optional[ElementNode]:
    if not sources:
        return None
    return node(
        "execution",
        xml_tags("id", goal),
        xml_tags("phase", phase),
        node("goals", xml_tags("goal", goal)),
        node("configuration", node("sources", *[xml_tags("source", s) for s in sources])),
    )


def _build_helper_plugin(extra_src: list, extra_test: list) -> Optional[ElementNode]:
    """Register extra source roots, since a POM allows a single source directory."""
    if not extra_src and not extra_test:
        return None
    return node(
        "plugins",
        node(
            "plugin",
            xml_tags("group-id", BUILD_HELPER_GROUP_ID),
            xml_tags("artifact-id", BUILD_HELPER_ARTIFACT_ID),
            xml_tags("version", BUILD_HELPER_VERSION),
            node(
                "executions",
                _build_helper_execution("add-source", "generate-sources", extra_src),
                _build_helper_execution("add-test-source", "generate-test-sources", extra_test),
            ),
        ),
    )


@register("build")
def _build_tag(_, projects) -> Optional[ElementNode]:
    """Render ``<build>`` from the default view and the test view of a project."""
    project, test_project = projects
    src, *extra_src = list(project.source_paths) + list(project.java_source_paths) or [None]
    test, *extra_test = list(test_project.test_paths) or [None]
    return _default_tag("build", [
        xml_tags("source-directory", src),
        xml_tags("test-source-directory", test),
        _resource_tags(project.resource_paths, "resource"),
        _resource_tags(test_project.resource_paths, "testResource"),
        xml_tags("extensions", project.extensions),
        xml_tags("directory", project.target_path),
        xml_tags("output-directory", project.compile_path),
        _build_helper_plugin(extra_src, extra_test),
    ])


@register("project")
def _project_tag(_, views: ProjectViews) -> ElementNode:
    """Assemble the whole ``<project>`` document from the three project views."""
    project = views.project
    dependencies = consolidate_dependencies(
        project.dependencies,
        views.provided.dependencies,
        views.test.dependencies,
    )
    return node(
        "project",
        xml_tags("model-version", "4.0.0"),
        xml_tags("parent", project.parent),
        xml_tags("group-id", project.group),
        xml_tags("artifact-id", project.name),
        xml_tags("packaging", project.packaging or "jar"),
        xml_tags("version", project.version),
        xml_tags("classifier", project.classifier),
        xml_tags("name", project.name),
        xml_tags("description", project.description),
        xml_tags("url", project.url),
        xml_tags("license", project.license),
        xml_tags("mailing-list", project.mailing_list),
        xml_tags("scm", scm_info(project)),
        xml_tags("build", (project, views.test)),
        xml_tags("repositories", project.repositories),
        xml_tags("dependencies", dependencies),
        project.pom_addition,
        attrib={
            "xmlns": POM_NAMESPACE,
            "xmlns:xsi": XSI_NAMESPACE,
            "xsi:schemaLocation": POM_SCHEMA_LOCATION,
        },
    )
