"""Validation of structural edits to the management hierarchy."""

from app.core.exceptions import (
    CycleWouldFormError,
    ManagerNotSeniorError,
    SelfAssignmentError,
    UnknownMemberError,
)
from app.core.hierarchy import HierarchyGraph
from app.core.role_catalog import rank


def validate_reassignment(member_id: str, proposed_manager_id: str, graph: HierarchyGraph) -> None:
    """
    Check that member_id may report to proposed_manager_id.

    Rules are evaluated in order and the first failure is raised. The graph
    is never modified; on success the caller persists the change and
    rebuilds the graph from a fresh snapshot.

    Raises:
        SelfAssignmentError: Member proposed as their own manager
        UnknownMemberError: Either id is missing from the snapshot
        CycleWouldFormError: Proposed manager already reports to the member
        ManagerNotSeniorError: Proposed manager does not strictly outrank the member
    """
    if member_id == proposed_manager_id:
        raise SelfAssignmentError("A member cannot be their own manager")

    for candidate in (member_id, proposed_manager_id):
        if candidate not in graph:
            raise UnknownMemberError(candidate)

    member = graph.get(member_id)
    manager = graph.get(proposed_manager_id)

    if any(sub.id == manager.id for sub in graph.descendants(member.id)):
        raise CycleWouldFormError(
            "Cannot assign a subordinate as manager (would create a cycle)"
        )

    if rank(manager.role) >= rank(member.role):
        raise ManagerNotSeniorError("Manager must hold a more senior role than the member")
