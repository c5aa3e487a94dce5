from __future__ import annotations

import json
from typing import TYPE_CHECKING

import pytest

from reliefsync.domain.reconciliation import BatchResult
from reliefsync.tabular import BOM, decode_rows, strip_bom
from reliefsync.ui import cli as cli_module
from tests.helpers.relief import csv_text

if TYPE_CHECKING:
    from collections.abc import Callable
    from pathlib import Path

    from reliefsync.adapters.sqlalchemy.unit_of_work import SqlAlchemyReliefUnitOfWork

    UowFactory = Callable[[], SqlAlchemyReliefUnitOfWork]


@pytest.fixture(autouse=True)
def cli_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("RELIEFSYNC_ACTOR_ROLE", raising=False)
    monkeypatch.setenv("RELIEFSYNC_ACTOR_ID", "ops-1")
    monkeypatch.delenv("RELIEFSYNC_SKIP_DUPLICATES", raising=False)


def test_cli_import_prints_result(
    sqlite_unit_of_work: UowFactory,
    tmp_path: Path,
    capsys: pytest.CaptureFixture[str],
) -> None:
    source = tmp_path / "grids.csv"
    source.write_text(
        BOM + csv_text("網格代碼,類型,災區,緯度,經度", "A1,residential,光復鄉,23.66,121.42", ",,,,"),
        encoding="utf-8",
    )

    cli_module.main(["import", "grids", str(source)])

    payload = json.loads(capsys.readouterr().out)
    assert payload["imported"] == 1
    assert payload["skipped"] == 0
    assert payload["errors"][0].startswith("Row 3: Missing required fields")
    with sqlite_unit_of_work() as uow:
        assert uow.repositories.grids.get_by_code("A1") is not None


def test_cli_export_writes_file(sqlite_unit_of_work: UowFactory, tmp_path: Path) -> None:
    source = tmp_path / "areas.csv"
    source.write_text(csv_text("災區名稱,緯度,經度", "光復鄉,23.66,121.42"), encoding="utf-8")
    cli_module.main(["import", "areas", str(source)])
    target = tmp_path / "out.csv"

    cli_module.main(["export", "areas", "--output", str(target)])

    text = target.read_text(encoding="utf-8")
    assert text.startswith(BOM)
    (row,) = decode_rows(strip_bom(text))
    assert row.get("災區名稱") == "光復鄉"
    with sqlite_unit_of_work() as uow:
        assert uow.repositories.areas.get_by_name("光復鄉") is not None


def test_cli_template_goes_to_stdout(capsys: pytest.CaptureFixture[str]) -> None:
    cli_module.main(["template", "announcements"])

    assert "標題（必填）" in capsys.readouterr().out


def test_cli_passes_duplicate_flag(
    monkeypatch: pytest.MonkeyPatch, tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    captured: dict[str, object] = {}

    def fake_import(family: str, text: str, **kwargs: object) -> BatchResult:
        captured.update(kwargs, family=family, text=text)
        return BatchResult(imported=2)

    monkeypatch.setattr(cli_module, "import_csv", fake_import)
    source = tmp_path / "users.csv"
    source.write_text("姓名\n張三\n", encoding="utf-8")

    cli_module.main(["import", "users", str(source), "--no-skip-duplicates", "--trash"])

    assert captured["family"] == "users"
    assert captured["skip_duplicates"] is False
    assert captured["trash"] is True
    assert json.loads(capsys.readouterr().out) == {"imported": 2, "skipped": 0}


def test_cli_defaults_duplicate_flag_to_config(
    monkeypatch: pytest.MonkeyPatch, tmp_path: Path
) -> None:
    captured: dict[str, object] = {}

    def fake_import(*_args: str, **kwargs: object) -> BatchResult:
        captured.update(kwargs)
        return BatchResult()

    monkeypatch.setattr(cli_module, "import_csv", fake_import)
    source = tmp_path / "users.csv"
    source.write_text("姓名\n張三\n", encoding="utf-8")

    cli_module.main(["import", "users", str(source)])

    assert captured["skip_duplicates"] is None


def test_cli_warns_when_falling_back_to_latin1(
    monkeypatch: pytest.MonkeyPatch, tmp_path: Path, caplog: pytest.LogCaptureFixture
) -> None:
    captured: dict[str, object] = {}

    def fake_import(_family: str, text: str, **_kwargs: object) -> BatchResult:
        captured["text"] = text
        return BatchResult()

    monkeypatch.setattr(cli_module, "import_csv", fake_import)
    source = tmp_path / "users.csv"
    source.write_bytes("姓名\n張三\n".encode("big5"))

    with caplog.at_level("WARNING", logger=cli_module.__name__):
        cli_module.main(["import", "users", str(source)])

    assert captured["text"] == "姓名\n張三\n".encode("big5").decode("latin-1")
    assert "is not valid UTF-8" in caplog.text


def test_cli_reports_missing_file_with_exit_code(tmp_path: Path) -> None:
    with pytest.raises(SystemExit) as excinfo:
        cli_module.main(["import", "grids", str(tmp_path / "missing.csv")])

    assert excinfo.value.code == 2


def test_cli_rejects_unknown_role(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("RELIEFSYNC_ACTOR_ROLE", "moderator")

    with pytest.raises(SystemExit) as excinfo:
        cli_module.main(["template", "grids"])

    assert excinfo.value.code == 2


def test_cli_rejects_unknown_family() -> None:
    with pytest.raises(SystemExit) as excinfo:
        cli_module.main(["export", "donkeys"])

    assert excinfo.value.code == 2
