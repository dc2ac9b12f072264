"""Caller identity."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True, slots=True)
class CallerIdentity:
    """
    Identity of the user making a catalog request.

    Permission decisions are not made here; see `permissions.ability`.
    """
    # User identity (from JWT `sub` or X-User-UUID)
    user_uuid: str | None = None

    # Organization the user is acting in
    organization_uuid: str | None = None

    # Organization-wide role (viewer, editor, developer, admin)
    org_role: str | None = None

    # Per-project role overrides: project uuid -> role
    project_roles: dict[str, str] = field(default_factory=dict)

    email: str | None = None

    # Additional claims from auth token
    claims: dict[str, Any] = field(default_factory=dict)

    @property
    def principal(self) -> str:
        """Primary identifier for this caller."""
        return self.email or self.user_uuid or "anonymous"

    @property
    def is_anonymous(self) -> bool:
        return self.user_uuid is None

    def __str__(self) -> str:
        return self.principal
