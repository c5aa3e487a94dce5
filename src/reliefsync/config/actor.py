"""Actor identity used by command-line runs."""

from __future__ import annotations

from reliefsync.domain.model import Actor, UserRole

from .env import optional_env_var
from .errors import ConfigurationError


def get_cli_actor() -> Actor:
    role_value = optional_env_var("RELIEFSYNC_ACTOR_ROLE") or UserRole.SUPER_ADMIN.value
    try:
        role = UserRole(role_value)
    except ValueError as exc:
        raise ConfigurationError(f"Unknown actor role: {role_value}") from exc
    return Actor(
        id=optional_env_var("RELIEFSYNC_ACTOR_ID"),
        role=role,
        name=optional_env_var("RELIEFSYNC_ACTOR_NAME"),
    )
