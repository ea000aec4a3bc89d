"""
Name: Role-check Policy

Responsibilities:
  - Decide whether a caller's role set satisfies a required role set
  - Make the GlobalAdmin escalation an explicit, testable rule

Collaborators:
  - identity/gate.py
  - api/page_routes.py: computes which sections a caller can open
"""

from typing import FrozenSet, Iterable

from ..domain.entities import Role

# R: Roles that satisfy every role requirement
ESCALATING_ROLES: FrozenSet[Role] = frozenset({Role.GLOBAL_ADMIN})


def effective_required_roles(required: Iterable[Role]) -> FrozenSet[Role]:
    """R: The declared roles plus GlobalAdmin."""
    return frozenset(required) | ESCALATING_ROLES


def satisfies(held: Iterable[Role], required: Iterable[Role]) -> bool:
    """
    R: True iff the caller holds at least one required role.

    An empty requirement is satisfied by any caller. Otherwise GlobalAdmin
    is added to the required set before intersecting.
    """
    required_set = frozenset(required)
    if not required_set:
        return True
    return not frozenset(held).isdisjoint(effective_required_roles(required_set))
