from app.core.hierarchy import HierarchyGraph
from app.core.role_catalog import rank
from app.models.member import Member
from app.models.role import TeamRole


def can_manage(actor: Member, target: Member, graph: HierarchyGraph, transitive: bool = False) -> bool:
    """
    Check whether actor may manage target.

    - CEO manages everyone
    - Nobody else manages themselves, peers or seniors
    - Otherwise target must report to actor: directly by default, or at any
      depth when transitive is set

    Args:
        actor: Member performing the action
        target: Member being acted on
        graph: Hierarchy built from the same snapshot as both members
        transitive: Extend authority to indirect reports

    Returns:
        True if actor has authority over target
    """
    if actor.role == TeamRole.CEO:
        return True

    if actor.id == target.id:
        return False

    if rank(target.role) <= rank(actor.role):
        return False

    if actor.id not in graph:
        return False

    return graph.is_subordinate(target.id, actor.id, transitive=transitive)
