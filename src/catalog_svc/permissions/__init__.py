"""Coarse project and space permissions."""

from .ability import (
    Ability,
    Action,
    ProjectResource,
    Resource,
    ResourceKind,
    RoleAbility,
    SpaceAccessLevel,
    SpaceResource,
    cannot,
)

__all__ = [
    "Ability",
    "Action",
    "ProjectResource",
    "Resource",
    "ResourceKind",
    "RoleAbility",
    "SpaceAccessLevel",
    "SpaceResource",
    "cannot",
]
