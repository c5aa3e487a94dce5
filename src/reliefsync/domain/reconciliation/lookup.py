"""Resolution of related records referenced by natural key."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from reliefsync.domain.model import DisasterArea
from reliefsync.domain.reconciliation.contracts import RowRejected

if TYPE_CHECKING:
    from reliefsync.domain.model import Grid
    from reliefsync.domain.reconciliation.contracts import RowContext

log = logging.getLogger(__name__)


def find_or_create_area(ctx: RowContext, *, name: str, lat: float, lng: float) -> DisasterArea:
    """Return the area with ``name``, creating it at the row's coordinates if absent.

    Areas created here persist even if the row is later skipped as a duplicate;
    they are only discarded when the row itself fails.
    """

    areas = ctx.repositories.areas
    area = areas.get_by_name(name)
    if area is not None:
        return area
    area = DisasterArea(
        name=name,
        center_lat=lat,
        center_lng=lng,
        created_by_id=ctx.actor.id,
        created_by=ctx.actor_name,
    )
    areas.add(area)
    log.info("Created disaster area %s for imported grid", name)
    return area


def require_grid(ctx: RowContext, code: str) -> Grid:
    grid = ctx.repositories.grids.get_by_code(code)
    if grid is None:
        raise RowRejected(f"Grid not found: {code}")
    return grid
