import dataclasses

import pytest

from app.core.exceptions import (
    CycleDetectedError,
    MissingRootError,
    StructuralError,
    UnknownMemberError,
)
from app.core.hierarchy import HierarchyGraph
from app.core.hierarchy_validator import validate_reassignment
from app.models.role import Department, MemberStatus, TeamRole
from tests.conftest import make_member


def ids(members):
    return [m.id for m in members]


class TestBuild:
    """Tests for HierarchyGraph.build"""

    def test_build_indexes_all_members(self, scenario_members):
        graph = HierarchyGraph.build(scenario_members)

        assert len(graph) == 4
        assert "3" in graph
        assert "99" not in graph
        assert graph.root.id == "1"
        assert not graph.is_degenerate

    def test_build_without_ceo_fails(self):
        members = [
            make_member("1", TeamRole.DIRECTOR),
            make_member("2", TeamRole.MANAGER, manager_id="1"),
        ]

        with pytest.raises(MissingRootError):
            HierarchyGraph.build(members)

    def test_build_empty_snapshot_fails(self):
        with pytest.raises(MissingRootError):
            HierarchyGraph.build([])

    def test_build_without_ceo_tolerated_when_not_required(self):
        members = [
            make_member("1", TeamRole.DIRECTOR),
            make_member("2", TeamRole.MANAGER, manager_id="1"),
        ]

        graph = HierarchyGraph.build(members, require_root=False)

        assert graph.is_degenerate
        assert graph.root is None
        assert graph.org_chart() is None
        assert ids(graph.children("1")) == ["2"]
        assert graph.depth("2") == 1

    def test_multiple_ceos_flagged_as_degenerate(self):
        members = [
            make_member("1", TeamRole.CEO),
            make_member("2", TeamRole.CEO),
            make_member("3", TeamRole.MANAGER, manager_id="2"),
        ]

        graph = HierarchyGraph.build(members)

        assert graph.is_degenerate
        assert graph.root is None
        assert ids(graph.roots) == ["1", "2"]
        assert ids(graph.descendants("2")) == ["3"]
        assert graph.stats().is_degenerate

    def test_unknown_member_raises(self, scenario_members):
        graph = HierarchyGraph.build(scenario_members)

        with pytest.raises(UnknownMemberError):
            graph.children("99")
        with pytest.raises(UnknownMemberError):
            graph.ancestor_path("99")


class TestChildrenOrdering:
    """Tests for deterministic child ordering"""

    def _members(self):
        return [
            make_member("1", TeamRole.CEO, full_name="Ceo"),
            make_member("2", TeamRole.MANAGER, manager_id="1", full_name="Ana"),
            make_member("3", TeamRole.DIRECTOR, manager_id="1", full_name="Zoe"),
            make_member("4", TeamRole.DIRECTOR, manager_id="1", full_name="bruno"),
            make_member("5", TeamRole.C_LEVEL, manager_id="1", full_name="Yara"),
        ]

    def test_children_sorted_by_rank_then_name(self):
        graph = HierarchyGraph.build(self._members())

        assert ids(graph.children("1")) == ["5", "4", "3", "2"]

    def test_children_ordering_is_stable(self):
        graph = HierarchyGraph.build(self._members())

        assert ids(graph.children("1")) == ids(graph.children("1"))

    def test_children_ordering_ignores_input_order(self):
        forward = HierarchyGraph.build(self._members())
        backward = HierarchyGraph.build(list(reversed(self._members())))

        assert ids(forward.children("1")) == ids(backward.children("1"))

    def test_leaf_has_no_children(self, scenario_members):
        graph = HierarchyGraph.build(scenario_members)

        assert graph.children("4") == []


class TestTraversals:
    """Tests for ancestor paths, descendants and depth"""

    def test_ancestor_path_root_first(self, scenario_members):
        graph = HierarchyGraph.build(scenario_members)

        assert ids(graph.ancestor_path("4")) == ["1", "2", "3", "4"]
        assert ids(graph.ancestor_path("1")) == ["1"]

    def test_depth(self, scenario_members):
        graph = HierarchyGraph.build(scenario_members)

        assert graph.depth("1") == 0
        assert graph.depth("2") == 1
        assert graph.depth("4") == 3

    def test_descendants_are_exhaustive(self, scenario_members):
        graph = HierarchyGraph.build(scenario_members)

        assert set(ids(graph.descendants("1"))) == {"2", "3", "4"}
        assert ids(graph.descendants("3")) == ["4"]
        assert graph.descendants("4") == []

    def test_direct_manager(self, scenario_members):
        graph = HierarchyGraph.build(scenario_members)

        assert graph.direct_manager("4").id == "3"
        assert graph.direct_manager("1") is None

    def test_dangling_manager_reference_is_a_root(self):
        members = [
            make_member("1", TeamRole.CEO),
            make_member("2", TeamRole.SENIOR, manager_id="404"),
        ]

        graph = HierarchyGraph.build(members)

        assert ids(graph.ancestor_path("2")) == ["2"]
        assert graph.depth("2") == 0
        assert graph.direct_manager("2") is None
        assert "2" in ids(graph.roots)
        assert graph.is_degenerate

    def test_is_subordinate(self, scenario_members):
        graph = HierarchyGraph.build(scenario_members)

        assert graph.is_subordinate("4", "2")
        assert not graph.is_subordinate("4", "2", transitive=False)
        assert graph.is_subordinate("3", "2", transitive=False)
        assert not graph.is_subordinate("2", "4")


class TestCycleGuards:
    """Traversals must terminate on snapshots written without validation"""

    def _cyclic(self):
        return [
            make_member("1", TeamRole.CEO),
            make_member("a", TeamRole.MANAGER, manager_id="b"),
            make_member("b", TeamRole.SENIOR, manager_id="a"),
        ]

    def test_ancestor_path_detects_cycle(self):
        graph = HierarchyGraph.build(self._cyclic())

        with pytest.raises(CycleDetectedError):
            graph.ancestor_path("a")
        with pytest.raises(CycleDetectedError):
            graph.depth("b")

    def test_ancestor_path_detects_self_loop(self):
        members = [
            make_member("1", TeamRole.CEO),
            make_member("x", TeamRole.SENIOR, manager_id="x"),
        ]
        graph = HierarchyGraph.build(members)

        with pytest.raises(CycleDetectedError):
            graph.ancestor_path("x")

    def test_descendants_terminate_on_cycle(self):
        graph = HierarchyGraph.build(self._cyclic())

        assert ids(graph.descendants("a")) == ["b"]
        assert ids(graph.descendants("b")) == ["a"]

    def test_validated_edits_never_introduce_cycles(self, scenario_members):
        members = {m.id: m for m in scenario_members}
        members["5"] = make_member("5", TeamRole.MANAGER, manager_id="2")
        members["6"] = make_member("6", TeamRole.JUNIOR, manager_id="5")

        for member_id in sorted(members):
            for manager_id in sorted(members):
                graph = HierarchyGraph.build(members.values())
                try:
                    validate_reassignment(member_id, manager_id, graph)
                except StructuralError:
                    continue
                members[member_id] = dataclasses.replace(
                    members[member_id], manager_id=manager_id
                )

        graph = HierarchyGraph.build(members.values())
        for member_id in members:
            assert len(graph.ancestor_path(member_id)) <= len(members)


class TestReporting:
    """Tests for distribution, stats and org chart"""

    def test_distribution_counts_active_members_by_depth(self, scenario_members):
        members = scenario_members + [
            make_member("5", TeamRole.MANAGER, manager_id="1", status=MemberStatus.ON_LEAVE),
        ]
        graph = HierarchyGraph.build(members)

        assert graph.distribution() == {0: 1, 1: 1, 2: 1, 3: 1}

    def test_stats(self, scenario_members):
        members = scenario_members + [
            make_member("5", TeamRole.INTERN, manager_id="4", status=MemberStatus.TERMINATED),
        ]
        stats = HierarchyGraph.build(members).stats()

        assert stats.total_members == 5
        assert stats.active_members == 4
        assert stats.max_depth == 3
        assert stats.has_ceo
        assert not stats.is_degenerate

    def test_org_chart(self, scenario_members):
        members = scenario_members + [make_member("5", TeamRole.C_LEVEL, manager_id="1")]
        chart = HierarchyGraph.build(members).org_chart()

        assert chart.member.id == "1"
        assert [child.member.id for child in chart.children] == ["5", "2"]
        director = chart.children[1]
        assert director.children[0].member.id == "3"
        assert director.children[0].children[0].member.id == "4"


class TestSnapshotQueries:
    """Tests for search, grouping and manager suggestions"""

    def _members(self):
        return [
            make_member("1", TeamRole.CEO, full_name="Carla Souza", department=Department.OPERATIONS),
            make_member("2", TeamRole.C_LEVEL, "1", "Pedro Gomes", Department.FINANCE),
            make_member("3", TeamRole.DIRECTOR, "1", "Diego Lima", Department.ENGINEERING),
            make_member("4", TeamRole.DIRECTOR, "1", "Vera Dias", Department.SALES),
            make_member("5", TeamRole.SENIOR, "3", "Sergio Reis", Department.ENGINEERING,
                        email="sergio@acme.test"),
            make_member("6", TeamRole.SENIOR, "3", "Rita Cruz", Department.ENGINEERING),
        ]

    def test_search_by_name_and_email(self):
        graph = HierarchyGraph.build(self._members())

        assert ids(graph.search("sergio@")) == ["5"]
        assert ids(graph.search("  LIMA ")) == ["3"]
        assert len(graph.search("   ")) == 6

    def test_grouping(self):
        graph = HierarchyGraph.build(self._members())

        by_department = graph.group_by_department()
        assert ids(by_department[Department.ENGINEERING]) == ["3", "5", "6"]
        assert ids(graph.members_by_role(TeamRole.DIRECTOR)) == ["3", "4"]
        assert ids(graph.group_by_role()[TeamRole.SENIOR]) == ["5", "6"]
        assert ids(graph.members_by_department("sales")) == ["4"]

    def test_suggested_managers(self):
        graph = HierarchyGraph.build(self._members())

        # Same department or CEO/C-level, strictly senior, never self or peers
        assert ids(graph.suggested_managers("5")) == ["1", "2", "3"]
        assert ids(graph.suggested_managers("1")) == []
