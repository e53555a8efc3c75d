"""Consolidation of profile-specific dependency views.

Pure list logic: callers hand in already materialized dependency lists for
the default, ``provided`` and test views of a project.
"""

from dataclasses import replace

from .project_models import DependencySpec


def make_scope(scope: str, dep: DependencySpec) -> DependencySpec:
    """Return a copy of ``dep`` stamped with ``scope``, replacing any existing scope."""
    return replace(dep, scope=scope)


def distinct_by_identity(deps: list[DependencySpec]) -> list[DependencySpec]:
    """Drop later declarations of an already seen ``(group, artifact)`` pair."""
    seen = set()
    result = []
    for dep in deps:
        if dep.identity in seen:
            continue
        seen.add(dep.identity)
        result.append(dep)
    return result


def consolidate_dependencies(
    base: list[DependencySpec],
    provided: list[DependencySpec],
    test: list[DependencySpec],
) -> list[DependencySpec]:
    """Merge the three dependency views into one scoped, deduplicated list.

    Entries of the ``provided`` view get ``scope=provided`` and entries of
    the ``test`` view get ``scope=test``. The views are concatenated in
    that order and deduplicated by identity, so a base declaration (with
    its own scope, if any) always wins over a profile-injected one.

    Args:
        base: Dependencies of the project with no special profiles merged.
        provided: Dependencies with the ``provided`` profile merged.
        test: Dependencies with ``provided``, ``dev``, ``test`` and ``default`` merged.

    Returns:
        The consolidated dependency list in declaration order.
    """
    return distinct_by_identity(
        list(base)
        + [make_scope("provided", d) for d in provided]
        + [make_scope("test", d) for d in test]
    )
