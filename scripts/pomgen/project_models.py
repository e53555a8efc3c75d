"""Project descriptor data model classes.

Pure data structures describing a project as the POM generator sees it,
plus the ``ElementNode`` tree the tag generator builds.
No behavior or imports from other pomgen modules.
"""

from dataclasses import dataclass, field
from typing import Optional, Union


def split_coordinate(coordinate: str) -> tuple[str, str]:
    """Split a ``group/artifact`` coordinate into ``(group, artifact)``.

    An unqualified coordinate (``clojure``) uses the artifact name as its
    group, so ``clojure`` becomes ``("clojure", "clojure")``.
    """
    group, sep, artifact = coordinate.rpartition("/")
    if not sep or not group:
        return artifact, artifact
    return group, artifact


@dataclass
class Exclusion:
    """An entry of a dependency's ``<exclusions>`` list.

    Attributes:
        coordinate: ``group/artifact`` or a bare artifact name.
        classifier: Optional classifier of the excluded artifact.
        extension: Optional packaging type, rendered as ``<type>``.
    """
    coordinate: str
    classifier: Optional[str] = None
    extension: Optional[str] = None


@dataclass
class DependencySpec:
    """A declared dependency, as it will appear in ``<dependencies>``.

    Attributes:
        coordinate: ``group/artifact`` or a bare artifact name, in which case
            the artifact name doubles as the groupId.
        version: Version string (e.g. ``1.11.1`` or ``2.0.0-SNAPSHOT``).
        classifier: Optional classifier (e.g. ``sources``).
        extension: Optional packaging type, rendered as ``<type>``.
        scope: Maven scope, or ``None`` for Maven's default.
        optional: Whether to emit ``<optional>true</optional>``.
        exclusions: Exclusions as :class:`Exclusion` or bare coordinate strings.
    """
    coordinate: str
    version: Optional[str] = None
    classifier: Optional[str] = None
    extension: Optional[str] = None
    scope: Optional[str] = None
    optional: bool = False
    exclusions: list = field(default_factory=list)

    @property
    def group_id(self) -> str:
        return split_coordinate(self.coordinate)[0]

    @property
    def artifact_id(self) -> str:
        return split_coordinate(self.coordinate)[1]

    @property
    def identity(self) -> tuple[str, str]:
        """The ``(group, artifact)`` pair two duplicate declarations share."""
        return split_coordinate(self.coordinate)


@dataclass
class RepositorySpec:
    """A ``<repository>`` entry.

    ``None`` for ``snapshots``/``releases`` means "not specified", which
    renders as enabled.
    """
    id: str
    url: Optional[str] = None
    snapshots: Optional[bool] = None
    releases: Optional[bool] = None


@dataclass
class License:
    name: Optional[str] = None
    url: Optional[str] = None
    distribution: Optional[str] = None
    comments: Optional[str] = None


@dataclass
class MailingList:
    name: Optional[str] = None
    subscribe: Optional[str] = None
    unsubscribe: Optional[str] = None
    post: Optional[str] = None
    archive: Optional[str] = None
    other_archives: list = field(default_factory=list)


@dataclass
class ScmSpec:
    """The descriptor's ``scm`` section.

    Attributes:
        name: SCM kind (e.g. ``git``). ``None`` or ``"auto"`` asks for
            auto-detection unless one of the four POM fields is supplied.
        dir: Alternate directory holding ``.git`` for auto-detection.
        url: Browse URL.
        connection: Read-only connection string.
        tag: Revision tag.
        developer_connection: Read-write connection string.
    """
    name: Optional[str] = None
    dir: Optional[str] = None
    url: Optional[str] = None
    connection: Optional[str] = None
    tag: Optional[str] = None
    developer_connection: Optional[str] = None


@dataclass
class ScmInfo:
    """SCM metadata derived from a git directory on disk."""
    connection: Optional[str] = None
    developer_connection: Optional[str] = None
    url: Optional[str] = None
    tag: Optional[str] = None


@dataclass
class ParentSpec:
    coordinate: str
    version: Optional[str] = None
    relative_path: Optional[str] = None


@dataclass
class Extension:
    coordinate: str
    version: Optional[str] = None


@dataclass
class Profile:
    """A named profile layered on top of the base descriptor.

    A composite profile lists other profile names in ``includes`` and
    contributes nothing itself.
    """
    includes: list = field(default_factory=list)
    dependencies: list = field(default_factory=list)
    repositories: list = field(default_factory=list)
    source_paths: list = field(default_factory=list)
    java_source_paths: list = field(default_factory=list)
    test_paths: list = field(default_factory=list)
    resource_paths: list = field(default_factory=list)


@dataclass
class ProjectDescriptor:
    """Central input of the generator: one project and its profiles.

    List fields hold the base (unprofiled) values; ``active_profiles``
    names the profiles layered on top of them, in merge order.

    Attributes:
        name: Project name, used as the artifactId.
        group: Maven groupId.
        version: Version string; ``SNAPSHOT`` marks a non-release build.
        root: Absolute project directory.
        pom_addition: Raw ``ElementNode`` appended verbatim to ``<project>``.
    """
    name: str
    group: str
    version: str
    root: str = ""
    description: Optional[str] = None
    packaging: Optional[str] = None
    classifier: Optional[str] = None
    url: Optional[str] = None
    license: Union[str, License, None] = None
    mailing_list: Optional[MailingList] = None
    scm: Optional[ScmSpec] = None
    parent: Optional[ParentSpec] = None
    dependencies: list = field(default_factory=list)
    repositories: list = field(default_factory=list)
    extensions: list = field(default_factory=list)
    source_paths: list = field(default_factory=list)
    java_source_paths: list = field(default_factory=list)
    test_paths: list = field(default_factory=list)
    resource_paths: list = field(default_factory=list)
    target_path: Optional[str] = None
    compile_path: Optional[str] = None
    pom_addition: Optional["ElementNode"] = None
    profiles: dict = field(default_factory=dict)
    active_profiles: tuple = ()

    @property
    def is_snapshot(self) -> bool:
        return "SNAPSHOT" in self.version


@dataclass
class ElementNode:
    """A node of the element tree handed to the XML serializer.

    ``children`` holds nested nodes or, for a leaf, a single text string.
    Absent children are never stored; builders drop ``None`` up front.
    """
    tag: str
    children: list = field(default_factory=list)
    attrib: dict = field(default_factory=dict)


@dataclass
class ProjectViews:
    """The materialized profile views a POM is generated from.

    Attributes:
        project: The project with no special profiles merged.
        provided: The project with the ``provided`` profile merged.
        test: The project with ``provided``, ``dev``, ``test`` and ``default`` merged.
    """
    project: ProjectDescriptor
    provided: ProjectDescriptor
    test: ProjectDescriptor
