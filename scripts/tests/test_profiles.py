"""Tests for profiles.py — profile merge, unmerge and materialization."""

from pomgen.profiles import (
    SPECIAL_PROFILES,
    apply_profiles,
    expand_profiles,
    merge_profiles,
    unmerge_profiles,
)
from pomgen.project_models import DependencySpec, Profile, ProjectDescriptor


def make_project(**profiles) -> ProjectDescriptor:
    return ProjectDescriptor(
        name="demo",
        group="demo",
        version="1.0.0",
        dependencies=[DependencySpec("org.clojure/clojure", "1.11.1")],
        source_paths=["src"],
        profiles=profiles,
    )


class TestExpandProfiles:
    def test_composite_expands_to_leaves(self):
        project = make_project(
            dev=Profile(),
            user=Profile(),
            default=Profile(includes=["base", "user", "dev"]),
        )
        assert expand_profiles(project, ["default"]) == ["user", "dev"]

    def test_cycle_is_cut(self):
        project = make_project(a=Profile(includes=["b"]), b=Profile(includes=["a", "c"]), c=Profile())
        assert expand_profiles(project, ["a"]) == ["c"]

    def test_unknown_profile_skipped(self):
        assert expand_profiles(make_project(), ["nope"]) == []


class TestMergeProfiles:
    def test_merge_records_active_profiles(self):
        project = make_project(dev=Profile(), test=Profile())
        merged = merge_profiles(project, ["dev", "test"])
        assert merged.active_profiles == ("dev", "test")
        assert project.active_profiles == ()

    def test_merge_does_not_duplicate(self):
        project = merge_profiles(make_project(dev=Profile()), ["dev"])
        assert merge_profiles(project, ["dev"]).active_profiles == ("dev",)

    def test_unmerge_removes_composite_leaves(self):
        project = make_project(
            dev=Profile(),
            custom=Profile(),
            default=Profile(includes=["dev"]),
        )
        project = merge_profiles(project, ["default", "custom"])
        assert unmerge_profiles(project, SPECIAL_PROFILES).active_profiles == ("custom",)


class TestApplyProfiles:
    def test_contributions_appended_in_order(self):
        project = make_project(
            dev=Profile(
                dependencies=[DependencySpec("ring/ring-mock", "0.4.0")],
                source_paths=["dev-src"],
            ),
            test=Profile(source_paths=["test-src"]),
        )
        view = apply_profiles(merge_profiles(project, ["dev", "test"]))
        assert [d.artifact_id for d in view.dependencies] == ["clojure", "ring-mock"]
        assert view.source_paths == ["src", "dev-src", "test-src"]
        assert view.active_profiles == ()

    def test_base_lists_not_mutated(self):
        project = make_project(dev=Profile(source_paths=["dev-src"]))
        apply_profiles(merge_profiles(project, ["dev"]))
        assert project.source_paths == ["src"]
