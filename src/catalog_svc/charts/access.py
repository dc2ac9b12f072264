"""Space-based chart access filtering."""

from __future__ import annotations

import asyncio
import logging
from typing import Awaitable, Callable, Sequence

from ..permissions.ability import Ability, Action, SpaceAccessLevel, SpaceResource
from .types import ChartSummary, Space


logger = logging.getLogger(__name__)

# (user_uuid, space_uuid) -> the user's direct access on the space
SpaceAccessLookup = Callable[[str, str], Awaitable[SpaceAccessLevel | None]]


async def filter_charts_with_access(
    charts: Sequence[ChartSummary],
    spaces: Sequence[Space],
    get_user_space_access: SpaceAccessLookup,
    ability: Ability,
    project_uuid: str,
    user_uuid: str,
) -> list[ChartSummary]:
    """
    Keep the charts whose space the user can view.

    Each space is checked once; checks run concurrently. Chart order is
    preserved.
    """

    async def can_view(space: Space) -> bool:
        access = await get_user_space_access(user_uuid, space.uuid)
        return ability.can(
            Action.VIEW,
            SpaceResource(
                organization_uuid=space.organization_uuid,
                project_uuid=project_uuid,
                is_private=space.is_private,
                access=access,
            ),
        )

    has_space_access = await asyncio.gather(*(can_view(space) for space in spaces))
    allowed_space_uuids = {
        space.uuid for space, allowed in zip(spaces, has_space_access) if allowed
    }

    visible = [chart for chart in charts if chart.space_uuid in allowed_space_uuids]
    logger.debug(
        f"User {user_uuid} can view {len(allowed_space_uuids)}/{len(spaces)} spaces, "
        f"{len(visible)}/{len(charts)} charts"
    )
    return visible
