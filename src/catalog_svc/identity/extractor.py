"""Caller identity from request headers."""

from __future__ import annotations

import base64
import json
import logging
from dataclasses import dataclass
from typing import Any, Callable

from starlette.requests import Request

from .types import CallerIdentity


logger = logging.getLogger(__name__)


def decode_jwt_payload(token: str) -> dict[str, Any] | None:
    """
    Read the claims of a JWT without verifying it.

    Signatures are checked by the gateway in front of the service. Returns
    None for anything that isn't a three-part token with a JSON object
    payload.
    """
    segments = token.split(".")
    if len(segments) != 3:
        return None

    encoded = segments[1] + "=" * (-len(segments[1]) % 4)
    try:
        claims = json.loads(base64.urlsafe_b64decode(encoded))
    except (ValueError, UnicodeDecodeError) as e:
        logger.debug(f"Unreadable bearer token: {e}")
        return None

    return claims if isinstance(claims, dict) else None


@dataclass
class IdentityExtractor:
    """
    Works out who is calling.

    Sources, first match wins:
    1. `custom_extractor`, when set and it returns an identity
    2. Bearer JWT claims (`sub`, `org`, `role`, `projects`, `email`)
    3. Gateway headers (`X-User-UUID`, `X-Organization-UUID`, ...)

    Anything else is anonymous, which no ability grants access to.
    """
    authorization_header: str = "Authorization"
    user_header: str = "X-User-UUID"
    organization_header: str = "X-Organization-UUID"
    role_header: str = "X-Org-Role"
    email_header: str = "X-User-Email"

    user_claim: str = "sub"
    organization_claim: str = "org"
    role_claim: str = "role"
    projects_claim: str = "projects"
    email_claim: str = "email"

    custom_extractor: Callable[[Request], CallerIdentity | None] | None = None

    def extract(self, request: Request) -> CallerIdentity:
        if self.custom_extractor is not None:
            custom = self.custom_extractor(request)
            if custom is not None:
                return custom

        return (
            self._from_bearer_token(request)
            or self._from_gateway_headers(request)
            or CallerIdentity()
        )

    def _from_bearer_token(self, request: Request) -> CallerIdentity | None:
        scheme, _, token = request.headers.get(self.authorization_header, "").partition(" ")
        if scheme != "Bearer" or not token:
            return None

        claims = decode_jwt_payload(token)
        if claims is None:
            return None

        projects = claims.get(self.projects_claim)
        project_roles = (
            {str(uuid): str(role) for uuid, role in projects.items()}
            if isinstance(projects, dict) else {}
        )

        return CallerIdentity(
            user_uuid=claims.get(self.user_claim),
            organization_uuid=claims.get(self.organization_claim),
            org_role=claims.get(self.role_claim),
            project_roles=project_roles,
            email=claims.get(self.email_claim),
            claims=claims,
        )

    def _from_gateway_headers(self, request: Request) -> CallerIdentity | None:
        headers = request.headers
        user_uuid = headers.get(self.user_header)
        if not user_uuid:
            return None

        return CallerIdentity(
            user_uuid=user_uuid,
            organization_uuid=headers.get(self.organization_header),
            org_role=headers.get(self.role_header),
            email=headers.get(self.email_header),
        )


_default_extractor = IdentityExtractor()


def extract_identity(request: Request) -> CallerIdentity:
    """Identity of the caller, using the default header and claim names."""
    return _default_extractor.extract(request)
