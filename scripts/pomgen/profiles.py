"""Profile merging for project descriptors.

Profiles are recorded by name on the descriptor and only folded into its
list fields when a view is materialized with :func:`apply_profiles`.
"""

from dataclasses import replace

from .project_models import ProjectDescriptor

# Profile layers stripped from a project before its POM is generated.
SPECIAL_PROFILES = ["user", "provided", "dev", "test", "default"]

# Descriptor list fields a profile may contribute to.
_PROFILE_FIELDS = (
    "dependencies",
    "repositories",
    "source_paths",
    "java_source_paths",
    "test_paths",
    "resource_paths",
)


def expand_profiles(project: ProjectDescriptor, names: list[str], _seen: set = None) -> list[str]:
    """Expand composite profiles into the leaf profile names they include.

    Unknown names are skipped; include cycles are cut.

    Args:
        project: Descriptor whose ``profiles`` mapping is consulted.
        names: Profile names in merge order.
        _seen: Internal set of names already expanded (callers should not set this).

    Returns:
        Leaf profile names in merge order, without duplicates.
    """
    if _seen is None:
        _seen = set()

    result = []
    for name in names:
        if name in _seen:
            continue
        _seen.add(name)
        profile = project.profiles.get(name)
        if profile is None:
            continue
        if profile.includes:
            for leaf in expand_profiles(project, profile.includes, _seen):
                if leaf not in result:
                    result.append(leaf)
        elif name not in result:
            result.append(name)
    return result


def merge_profiles(project: ProjectDescriptor, names: list[str]) -> ProjectDescriptor:
    """Return a copy of ``project`` with ``names`` layered on top."""
    active = list(project.active_profiles)
    for leaf in expand_profiles(project, names):
        if leaf not in active:
            active.append(leaf)
    return replace(project, active_profiles=tuple(active))


def unmerge_profiles(project: ProjectDescriptor, names: list[str]) -> ProjectDescriptor:
    """Return a copy of ``project`` with ``names`` (and their leaves) removed."""
    removed = set(names)
    # Composite names remove every leaf they include.
    for name in names:
        if name in project.profiles:
            removed.update(expand_profiles(project, [name]))
    active = tuple(p for p in project.active_profiles if p not in removed)
    return replace(project, active_profiles=active)


def apply_profiles(project: ProjectDescriptor) -> ProjectDescriptor:
    """Materialize the active profiles into the descriptor's list fields.

    Profile contributions are appended after the base values in activation
    order. The returned descriptor records no active profiles.
    """
    merged = {f: list(getattr(project, f)) for f in _PROFILE_FIELDS}
    for name in project.active_profiles:
        profile = project.profiles.get(name)
        if profile is None:
            continue
        for f in _PROFILE_FIELDS:
            merged[f].extend(getattr(profile, f))
    return replace(project, active_profiles=(), **merged)
