"""CSV text handling: BOM normalisation and row encoding/decoding."""

from __future__ import annotations

from .codec import Column, CsvRow, decode_rows, encode_rows
from .encoding import BOM, strip_bom, with_bom

__all__ = ["BOM", "Column", "CsvRow", "decode_rows", "encode_rows", "strip_bom", "with_bom"]
