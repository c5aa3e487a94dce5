"""Resolution of typed field values from header-keyed CSV rows.

A logical field can appear under several header labels: the hint-bearing
template header (``網格代碼（必填）``) and the plain label written by exports
(``網格代碼``). The first non-empty candidate wins.
"""

from __future__ import annotations

import json
import math
import re
from dataclasses import dataclass
from enum import StrEnum
from typing import TYPE_CHECKING, Any, Final

from reliefsync.domain.reconciliation.contracts import RowRejected

if TYPE_CHECKING:
    from enum import Enum

    from reliefsync.tabular import CsvRow

TRUE_TOKENS: Final[frozenset[str]] = frozenset({"是", "true", "1", "yes", "y"})
FALSE_TOKENS: Final[frozenset[str]] = frozenset({"否", "false", "0", "no", "n"})
_JSON_PREFIXES: Final[tuple[str, ...]] = ("[", "{", '"')
# ``name:scheme://...`` or a bare URL; other colons belong to the name
_LINK_ITEM: Final = re.compile(r"^(?:(?P<name>.+?):)?(?P<url>[A-Za-z][A-Za-z0-9+.-]*://\S+)$")


class JsonShape(StrEnum):
    """How ``;``-separated summary items are turned back into list entries."""

    SCALARS = "scalars"
    OBJECTS = "objects"


@dataclass(frozen=True, slots=True)
class FieldSpec:
    """A logical field and the header labels it may be read from."""

    name: str
    label: str
    template: tuple[str, ...] = ()
    aliases: tuple[str, ...] = ()
    required: bool = False

    @property
    def headers(self) -> tuple[str, ...]:
        return (*self.template, self.label, *self.aliases)

    @property
    def template_label(self) -> str:
        return self.template[0] if self.template else self.label


def parse_bool(value: str) -> bool | None:
    token = value.strip().lower()
    if token in TRUE_TOKENS:
        return True
    if token in FALSE_TOKENS:
        return False
    return None


def parse_float(value: str) -> float | None:
    try:
        number = float(value.strip())
    except ValueError:
        return None
    return number if math.isfinite(number) else None


def parse_int(value: str) -> int | None:
    number = parse_float(value)
    if number is None or not number.is_integer():
        return None
    return int(number)


def parse_json_field(value: str, *, shape: JsonShape = JsonShape.OBJECTS) -> Any:
    """Decode a JSON-list cell.

    Text that looks like JSON is decoded as such; if it fails to decode it is
    kept verbatim as an opaque string. Anything else is a ``;``-separated
    summary of ``name:url`` or ``name`` items.
    """

    stripped = value.strip()
    if stripped.startswith(_JSON_PREFIXES):
        try:
            return json.loads(stripped)
        except json.JSONDecodeError:
            return value
    return [
        _summary_item(part.strip(), shape=shape) for part in stripped.split(";") if part.strip()
    ]


def _summary_item(part: str, *, shape: JsonShape) -> Any:
    if shape is JsonShape.SCALARS:
        return part
    link = _LINK_ITEM.match(part)
    if link is None:
        return {"name": part}
    url = link.group("url")
    return {"name": (link.group("name") or url).strip(), "url": url}


class FieldResolver:
    """Collects typed values for one row and reports every problem at once."""

    def __init__(self, row: CsvRow) -> None:
        self._row = row
        self._missing: list[str] = []
        self._invalid: list[str] = []

    @property
    def row(self) -> CsvRow:
        return self._row

    def raw(self, spec: FieldSpec) -> str | None:
        for header in spec.headers:
            value = self._row.get(header)
            if value:
                return value
        return None

    def text(self, spec: FieldSpec, default: str | None = None) -> str | None:
        value = self.raw(spec)
        if value is None:
            if spec.required:
                self._missing.append(spec.label)
            return default
        return value

    def required_text(self, spec: FieldSpec) -> str:
        return self.text(spec) or ""

    def number(self, spec: FieldSpec) -> float | None:
        value = self.raw(spec)
        if value is None:
            if spec.required:
                self._missing.append(spec.label)
            return None
        parsed = parse_float(value)
        if parsed is None:
            self._invalid.append(f"{spec.label} is not a number: {value}")
        return parsed

    def integer(self, spec: FieldSpec, default: int | None = 0) -> int | None:
        value = self.raw(spec)
        if value is None:
            if spec.required:
                self._missing.append(spec.label)
            return default
        parsed = parse_int(value)
        if parsed is None:
            if spec.required:
                self._invalid.append(f"{spec.label} is not a whole number: {value}")
            # unparseable optional counts fall back to zero, absent ones to ``default``
            return 0
        return parsed

    def flag(self, spec: FieldSpec, default: bool = False) -> bool:
        value = self.raw(spec)
        if value is None:
            return default
        parsed = parse_bool(value)
        if parsed is None:
            self._invalid.append(f"{spec.label} is not a yes/no value: {value}")
            return default
        return parsed

    def json_list(self, spec: FieldSpec, *, shape: JsonShape = JsonShape.OBJECTS) -> Any:
        value = self.raw(spec)
        if value is None:
            return None
        return parse_json_field(value, shape=shape)

    def choice[TEnum: Enum](
        self,
        spec: FieldSpec,
        enum_cls: type[TEnum],
        default: TEnum | None,
        *,
        allowed: tuple[TEnum, ...] | None = None,
    ) -> TEnum | None:
        value = self.raw(spec)
        if value is None:
            return default
        options = allowed if allowed is not None else tuple(enum_cls)
        for option in options:
            if option.value == value.strip().lower():
                return option
        expected = "/".join(str(option.value) for option in options)
        self._invalid.append(f"Invalid {spec.label}: {value} (expected {expected})")
        return default

    def finish(self) -> None:
        """Raise ``RowRejected`` if any required field was missing or invalid."""

        problems: list[str] = []
        if self._missing:
            row_json = json.dumps(self._row.as_json(), ensure_ascii=False)
            problems.append(
                f"Missing required fields ({', '.join(self._missing)}) in row: {row_json}"
            )
        problems.extend(self._invalid)
        if problems:
            raise RowRejected("; ".join(problems))
