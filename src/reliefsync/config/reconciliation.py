"""Defaults for CSV reconciliation runs."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, tzinfo
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from .env import env_flag, env_float, optional_env_var
from .errors import ConfigurationError

DEFAULT_EXPORT_TIMEZONE = "UTC"
DEFAULT_AREA_PROXIMITY_DEGREES = 0.001
DEFAULT_IMPORT_ACTOR_NAME = "CSV Import"


@dataclass(frozen=True, slots=True)
class ReconciliationConfig:
    skip_duplicates_default: bool = True
    export_timezone: str = DEFAULT_EXPORT_TIMEZONE
    area_proximity_degrees: float = DEFAULT_AREA_PROXIMITY_DEGREES
    import_actor_name: str = DEFAULT_IMPORT_ACTOR_NAME

    def __post_init__(self) -> None:
        if self.area_proximity_degrees < 0:
            raise ConfigurationError("Area proximity must be non-negative")

    def export_tz(self) -> tzinfo:
        """Timezone used to render timestamps in exported CSV files."""

        if self.export_timezone.upper() == "UTC":
            return UTC
        try:
            return ZoneInfo(self.export_timezone)
        except (ZoneInfoNotFoundError, ValueError) as exc:
            raise ConfigurationError(f"Unknown timezone: {self.export_timezone}") from exc


def get_reconciliation_config() -> ReconciliationConfig:
    return ReconciliationConfig(
        skip_duplicates_default=env_flag("RELIEFSYNC_SKIP_DUPLICATES", default=True),
        export_timezone=optional_env_var("RELIEFSYNC_EXPORT_TIMEZONE") or DEFAULT_EXPORT_TIMEZONE,
        area_proximity_degrees=env_float(
            "RELIEFSYNC_AREA_PROXIMITY", default=DEFAULT_AREA_PROXIMITY_DEGREES
        ),
    )
