"""Coarse permission checks on projects and spaces.

The catalog never decides project or space access itself; it asks an
`Ability`. `RoleAbility` is the default role-based implementation.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import ClassVar, Protocol, Union

from ..identity.types import CallerIdentity


class Action(str, Enum):
    """Actions a caller can attempt on a resource."""
    VIEW = "view"
    MANAGE = "manage"


class ResourceKind(str, Enum):
    """Kinds of resource covered by coarse checks."""
    PROJECT = "project"
    SPACE = "space"


class SpaceAccessLevel(str, Enum):
    """Direct access a user has been granted on a space."""
    VIEWER = "viewer"
    EDITOR = "editor"
    ADMIN = "admin"


@dataclass(frozen=True, slots=True)
class ProjectResource:
    organization_uuid: str
    project_uuid: str

    kind: ClassVar[ResourceKind] = ResourceKind.PROJECT


@dataclass(frozen=True, slots=True)
class SpaceResource:
    organization_uuid: str
    project_uuid: str
    is_private: bool
    # Caller's direct access on the space, None if not granted
    access: SpaceAccessLevel | None = None

    kind: ClassVar[ResourceKind] = ResourceKind.SPACE


Resource = Union[ProjectResource, SpaceResource]


class Ability(Protocol):
    """Decision function for coarse permission checks."""

    def can(self, action: Action, resource: Resource) -> bool:
        ...


def cannot(ability: Ability, action: Action, resource: Resource) -> bool:
    return not ability.can(action, resource)


# Higher rank includes everything a lower rank can do
ROLE_RANKS: dict[str, int] = {
    "viewer": 1,
    "interactive_viewer": 2,
    "editor": 3,
    "developer": 4,
    "admin": 5,
}


def role_rank(role: object) -> int:
    if not role:
        return 0
    # JWT claims are untyped
    return ROLE_RANKS.get(str(role).lower(), 0)


@dataclass(frozen=True)
class RoleAbility:
    """
    Role-based ability for a caller.

    - Nothing outside the caller's organization is allowed.
    - Organization admins can do anything inside their organization.
    - A project role overrides the organization role for that project.
    - Viewing a project needs any role; managing it needs admin.
    - Viewing a space needs project view, plus direct access if the
      space is private. Project admins see every space.
    - Managing a space needs editor on public spaces, and editor or admin
      direct access on private ones.
    """
    caller: CallerIdentity

    def can(self, action: Action, resource: Resource) -> bool:
        if self.caller.is_anonymous:
            return False
        if resource.organization_uuid != self.caller.organization_uuid:
            return False
        if role_rank(self.caller.org_role) >= ROLE_RANKS["admin"]:
            return True

        rank = role_rank(self._project_role(resource.project_uuid))
        if resource.kind == ResourceKind.PROJECT:
            if action == Action.VIEW:
                return rank > 0
            return rank >= ROLE_RANKS["admin"]

        if rank == 0:
            return False
        if rank >= ROLE_RANKS["admin"]:
            return True
        if action == Action.VIEW:
            return not resource.is_private or resource.access is not None
        if resource.is_private:
            return resource.access in (SpaceAccessLevel.EDITOR, SpaceAccessLevel.ADMIN)
        return rank >= ROLE_RANKS["editor"]

    def _project_role(self, project_uuid: str) -> str | None:
        return self.caller.project_roles.get(project_uuid) or self.caller.org_role
