"""Conversion between CSV text and header-keyed rows.

The first record is the header row; every following non-empty record becomes a
``CsvRow`` keyed by the (trimmed) header labels. Structural problems such as an
unterminated quote, duplicate headers or a record with the wrong number of
cells fail the whole document with ``MalformedCsvError``.
"""

from __future__ import annotations

import csv
import io
from dataclasses import dataclass
from typing import TYPE_CHECKING, NamedTuple

from reliefsync.domain.errors import MalformedCsvError

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator, Mapping, Sequence


class Column(NamedTuple):
    """Output column: record key and the header label written for it."""

    key: str
    label: str


@dataclass(frozen=True, slots=True)
class CsvRow:
    """One data record with the physical line it started on (header is line 1)."""

    line: int
    values: Mapping[str, str]

    def get(self, header: str) -> str | None:
        return self.values.get(header)

    def as_json(self) -> dict[str, str]:
        return dict(self.values)


def decode_rows(text: str) -> list[CsvRow]:
    """Parse BOM-free CSV text into rows keyed by header label."""

    reader = csv.reader(io.StringIO(text, newline=""), strict=True)
    records = _records_with_lines(reader)

    header: list[str] | None = None
    rows: list[CsvRow] = []
    for line, record in records:
        if not record:
            continue
        cells = [cell.strip() for cell in record]
        if header is None:
            header = _validate_header(cells, line=line)
            continue
        if len(cells) != len(header):
            raise MalformedCsvError(
                f"Expected {len(header)} cells but found {len(cells)}",
                line=line,
            )
        rows.append(CsvRow(line=line, values=dict(zip(header, cells, strict=True))))

    if header is None:
        raise MalformedCsvError("CSV text has no header row")
    return rows


def encode_rows(columns: Sequence[Column], rows: Iterable[Mapping[str, object]]) -> str:
    """Serialize rows into CSV text with a header line of column labels."""

    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")
    writer.writerow([column.label for column in columns])
    for row in rows:
        writer.writerow([_cell(row.get(column.key)) for column in columns])
    return buffer.getvalue()


def _records_with_lines(reader: Iterator[list[str]]) -> Iterator[tuple[int, list[str]]]:
    line_num = 0
    while True:
        start = line_num + 1
        try:
            record = next(reader)
        except StopIteration:
            return
        except csv.Error as exc:
            raise MalformedCsvError(f"Unparseable CSV: {exc}", line=start) from exc
        line_num = reader.line_num  # type: ignore[attr-defined]
        yield start, record


def _validate_header(cells: list[str], *, line: int) -> list[str]:
    seen: set[str] = set()
    for cell in cells:
        if not cell:
            continue
        if cell in seen:
            raise MalformedCsvError(f"Duplicate column header: {cell}", line=line)
        seen.add(cell)
    return cells


def _cell(value: object) -> str:
    if value is None:
        return ""
    return str(value)
