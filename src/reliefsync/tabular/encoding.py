"""Byte-order-mark handling for spreadsheet-friendly CSV text."""

from __future__ import annotations

from typing import Final

BOM: Final[str] = "\ufeff"
_BOM_VARIANTS: Final[tuple[str, ...]] = (
    BOM,
    # UTF-8 BOM bytes decoded as Latin-1
    "\u00ef\u00bb\u00bf",
)


def strip_bom(text: str) -> str:
    """Remove leading byte-order marks.

    Besides the literal U+FEFF code point this also drops the three-character
    sequence left behind when UTF-8 bytes were decoded as Latin-1, which is what
    some spreadsheet round-trips produce. Repeated marks are all removed, so the
    operation is idempotent; text without a BOM is returned unchanged.
    """

    stripped = text
    while True:
        for variant in _BOM_VARIANTS:
            if stripped.startswith(variant):
                stripped = stripped[len(variant) :]
                break
        else:
            return stripped


def with_bom(text: str) -> str:
    """Prefix exported text with a single BOM so Excel detects UTF-8."""

    return BOM + text
