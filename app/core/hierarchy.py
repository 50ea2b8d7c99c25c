"""
In-memory management hierarchy built from a flat member snapshot.

A graph is a read-only view over one snapshot. After any manager change the
caller must fetch a fresh member list and build a new graph; nothing here is
cached across mutations.
"""

from collections import deque
from dataclasses import dataclass, field
from typing import Iterable

from app.core.exceptions import CycleDetectedError, MissingRootError, UnknownMemberError
from app.core.role_catalog import rank
from app.models.member import Member
from app.models.role import Department, TeamRole


@dataclass
class HierarchyNode:
    """Org chart node: a member and its ordered direct reports"""

    member: Member
    children: list["HierarchyNode"] = field(default_factory=list)


@dataclass
class HierarchyStats:
    """Structural statistics for organizational reporting"""

    total_members: int
    active_members: int
    max_depth: int
    distribution: dict[int, int]
    has_ceo: bool
    is_degenerate: bool


def _sort_key(member: Member) -> tuple[int, str, str]:
    # Name tie-break keeps UI ordering stable; id makes it total.
    return (rank(member.role), member.full_name.casefold(), member.id)


class HierarchyGraph:
    """
    Management tree (or forest) over a member snapshot.

    Children are derived from manager_id references. Members whose
    manager_id points outside the snapshot are treated as roots of their own
    component. Traversals are guarded against cycles so that a snapshot
    written without validation can still be inspected.
    """

    def __init__(self, members: Iterable[Member]):
        self._members: dict[str, Member] = {}
        for member in members:
            self._members[member.id] = member

        children: dict[str, list[Member]] = {member_id: [] for member_id in self._members}
        for member in self._members.values():
            if member.manager_id is not None and member.manager_id in children:
                children[member.manager_id].append(member)
        for kids in children.values():
            kids.sort(key=_sort_key)
        self._children = children

    @classmethod
    def build(cls, members: Iterable[Member], require_root: bool = True) -> "HierarchyGraph":
        """
        Build a graph from a member snapshot.

        Args:
            members: Full member list of one tenant
            require_root: Fail when no member holds the CEO role

        Returns:
            HierarchyGraph over the snapshot

        Raises:
            MissingRootError: If require_root and there is no CEO
        """
        graph = cls(members)
        if require_root and not graph.ceos:
            raise MissingRootError("Hierarchy has no CEO to act as root")
        return graph

    # Lookups

    def __contains__(self, member_id: object) -> bool:
        return member_id in self._members

    def __len__(self) -> int:
        return len(self._members)

    @property
    def members(self) -> list[Member]:
        return list(self._members.values())

    def get(self, member_id: str) -> Member:
        """Member by id; raises UnknownMemberError if absent"""
        try:
            return self._members[member_id]
        except KeyError:
            raise UnknownMemberError(member_id) from None

    @property
    def ceos(self) -> list[Member]:
        return sorted(
            (m for m in self._members.values() if m.role == TeamRole.CEO), key=_sort_key
        )

    @property
    def roots(self) -> list[Member]:
        """Members without a manager inside the snapshot"""
        return sorted(
            (
                m
                for m in self._members.values()
                if m.manager_id is None or m.manager_id not in self._members
            ),
            key=_sort_key,
        )

    @property
    def root(self) -> Member | None:
        """The unique CEO, or None when there are zero or several"""
        ceos = self.ceos
        return ceos[0] if len(ceos) == 1 else None

    @property
    def is_degenerate(self) -> bool:
        """True unless there is exactly one root and it is the only CEO"""
        roots = self.roots
        return len(roots) != 1 or self.root is None or roots[0].id != self.root.id

    # Traversals

    def children(self, member_id: str) -> list[Member]:
        """Direct reports ordered by (rank, full name)"""
        self.get(member_id)
        return list(self._children[member_id])

    def direct_manager(self, member_id: str) -> Member | None:
        member = self.get(member_id)
        if member.manager_id is None:
            return None
        return self._members.get(member.manager_id)

    def ancestor_path(self, member_id: str) -> list[Member]:
        """
        Chain of managers from the top of the member's component down to it.

        Returns:
            [root, ..., member] inclusive

        Raises:
            UnknownMemberError: If member_id is not in the snapshot
            CycleDetectedError: If the walk revisits a member
        """
        current: Member | None = self.get(member_id)
        path: list[Member] = []
        seen: set[str] = set()
        while current is not None:
            if current.id in seen or len(path) >= len(self._members):
                raise CycleDetectedError(
                    f"Manager chain of member {member_id} loops through member {current.id}"
                )
            seen.add(current.id)
            path.append(current)
            if current.manager_id is None:
                break
            current = self._members.get(current.manager_id)
        path.reverse()
        return path

    def descendants(self, member_id: str) -> list[Member]:
        """All direct and indirect reports, breadth-first"""
        self.get(member_id)
        result: list[Member] = []
        visited = {member_id}
        queue = deque([member_id])
        while queue:
            for child in self._children[queue.popleft()]:
                if child.id in visited:
                    continue
                visited.add(child.id)
                result.append(child)
                queue.append(child.id)
        return result

    def depth(self, member_id: str) -> int:
        """Number of managers above the member; roots have depth 0"""
        return len(self.ancestor_path(member_id)) - 1

    def is_subordinate(self, member_id: str, manager_id: str, transitive: bool = True) -> bool:
        """Whether member_id reports to manager_id, directly or (if transitive) indirectly"""
        if transitive:
            return any(m.id == member_id for m in self.descendants(manager_id))
        return any(m.id == member_id for m in self.children(manager_id))

    def distribution(self) -> dict[int, int]:
        """Histogram of active members by depth"""
        counts: dict[int, int] = {}
        for member in self.active_members():
            level = self.depth(member.id)
            counts[level] = counts.get(level, 0) + 1
        return counts

    def org_chart(self) -> HierarchyNode | None:
        """Tree rooted at the unique CEO, None if there is no single CEO"""
        root = self.root
        if root is None:
            return None

        visited = {root.id}

        def build_node(member: Member) -> HierarchyNode:
            node = HierarchyNode(member=member)
            for child in self._children[member.id]:
                if child.id not in visited:
                    visited.add(child.id)
                    node.children.append(build_node(child))
            return node

        return build_node(root)

    def stats(self) -> HierarchyStats:
        distribution = self.distribution()
        return HierarchyStats(
            total_members=len(self._members),
            active_members=len(self.active_members()),
            max_depth=max(distribution, default=0),
            distribution=distribution,
            has_ceo=bool(self.ceos),
            is_degenerate=self.is_degenerate,
        )

    # Snapshot queries

    def active_members(self) -> list[Member]:
        return [m for m in self._members.values() if m.is_active]

    def members_by_department(self, department: Department | str) -> list[Member]:
        return [m for m in self._members.values() if m.department == department]

    def members_by_role(self, role: TeamRole | str) -> list[Member]:
        return [m for m in self._members.values() if m.role == role]

    def group_by_department(self) -> dict[Department, list[Member]]:
        groups: dict[Department, list[Member]] = {}
        for member in self._members.values():
            groups.setdefault(member.department, []).append(member)
        return groups

    def group_by_role(self) -> dict[TeamRole, list[Member]]:
        groups: dict[TeamRole, list[Member]] = {}
        for member in self._members.values():
            groups.setdefault(member.role, []).append(member)
        return groups

    def search(self, query: str) -> list[Member]:
        """Case-insensitive match on name or email; blank query returns everyone"""
        needle = query.strip().lower()
        if not needle:
            return self.members
        return [
            m
            for m in self._members.values()
            if needle in m.full_name.lower() or needle in m.email.lower()
        ]

    def suggested_managers(self, member_id: str) -> list[Member]:
        """
        Candidate managers for a member.

        A candidate must outrank the member and either work in the same
        department or sit at CEO/C-level, which may manage across departments.
        """
        member = self.get(member_id)
        member_rank = rank(member.role)
        return sorted(
            (
                m
                for m in self._members.values()
                if m.id != member.id
                and rank(m.role) < member_rank
                and (
                    m.department == member.department
                    or m.role in (TeamRole.CEO, TeamRole.C_LEVEL)
                )
            ),
            key=_sort_key,
        )
