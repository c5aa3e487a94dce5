from __future__ import annotations

from datetime import UTC
from pathlib import Path
from zoneinfo import ZoneInfo

import pytest

from reliefsync.config import (
    ConfigurationError,
    MissingConfigurationError,
    ReconciliationConfig,
    env_flag,
    get_cli_actor,
    get_database_uri,
    get_reconciliation_config,
    get_storage_config,
    require_env_vars,
)
from reliefsync.domain.model import UserRole


def test_require_env_vars_returns_values(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("EXAMPLE_VAR", "value")

    assert require_env_vars(["EXAMPLE_VAR"]) == {"EXAMPLE_VAR": "value"}


def test_require_env_vars_lists_missing_names(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("MISSING_VAR", raising=False)
    monkeypatch.setenv("BLANK_VAR", "   ")

    with pytest.raises(MissingConfigurationError) as exc:
        require_env_vars(["MISSING_VAR", "BLANK_VAR"])

    assert "BLANK_VAR, MISSING_VAR" in str(exc.value)


@pytest.mark.parametrize(("raw", "expected"), [("yes", True), ("0", False), ("TRUE", True)])
def test_env_flag_parses_tokens(
    monkeypatch: pytest.MonkeyPatch,
    raw: str,
    expected: bool,  # noqa: FBT001
) -> None:
    monkeypatch.setenv("SOME_FLAG", raw)

    assert env_flag("SOME_FLAG", default=not expected) is expected


def test_env_flag_rejects_garbage(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("SOME_FLAG", "maybe")

    with pytest.raises(ConfigurationError):
        env_flag("SOME_FLAG", default=True)


def test_reconciliation_config_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in (
        "RELIEFSYNC_SKIP_DUPLICATES",
        "RELIEFSYNC_EXPORT_TIMEZONE",
        "RELIEFSYNC_AREA_PROXIMITY",
    ):
        monkeypatch.delenv(name, raising=False)

    config = get_reconciliation_config()

    assert config == ReconciliationConfig()
    assert config.skip_duplicates_default is True
    assert config.export_tz() is UTC


def test_reconciliation_config_reads_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("RELIEFSYNC_SKIP_DUPLICATES", "false")
    monkeypatch.setenv("RELIEFSYNC_EXPORT_TIMEZONE", "Asia/Taipei")
    monkeypatch.setenv("RELIEFSYNC_AREA_PROXIMITY", "0.01")

    config = get_reconciliation_config()

    assert config.skip_duplicates_default is False
    assert config.export_tz() == ZoneInfo("Asia/Taipei")
    assert config.area_proximity_degrees == pytest.approx(0.01)


def test_reconciliation_config_rejects_unknown_timezone() -> None:
    with pytest.raises(ConfigurationError):
        ReconciliationConfig(export_timezone="Mars/Olympus").export_tz()


def test_reconciliation_config_rejects_negative_proximity(
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    monkeypatch.setenv("RELIEFSYNC_AREA_PROXIMITY", "-1")

    with pytest.raises(ConfigurationError):
        get_reconciliation_config()


def test_cli_actor_defaults_to_super_admin(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("RELIEFSYNC_ACTOR_ROLE", raising=False)
    monkeypatch.setenv("RELIEFSYNC_ACTOR_ID", "ops-1")

    actor = get_cli_actor()

    assert actor.role is UserRole.SUPER_ADMIN
    assert actor.id == "ops-1"


def test_cli_actor_rejects_unknown_role(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("RELIEFSYNC_ACTOR_ROLE", "moderator")

    with pytest.raises(ConfigurationError):
        get_cli_actor()


def test_database_uri_prefers_override(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("DATABASE_URI", "sqlite+pysqlite:///:memory:")

    assert get_database_uri() == "sqlite+pysqlite:///:memory:"


def test_database_uri_falls_back_to_data_dir(
    monkeypatch: pytest.MonkeyPatch, tmp_path: Path
) -> None:
    monkeypatch.delenv("DATABASE_URI", raising=False)
    monkeypatch.setenv("RELIEFSYNC_DATA_DIR", str(tmp_path))

    uri = get_database_uri()

    assert uri.startswith("sqlite+pysqlite:///")
    assert uri.endswith("reliefsync.db")
    assert get_storage_config().resolve_data_dir() == tmp_path.resolve()
