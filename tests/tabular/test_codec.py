from __future__ import annotations

import pytest

from reliefsync.domain.errors import MalformedCsvError
from reliefsync.tabular import Column, decode_rows, encode_rows


def test_decode_rows_keys_cells_by_header_and_trims() -> None:
    rows = decode_rows("網格代碼 , 類型\n A1 ,residential \n")

    assert len(rows) == 1
    assert rows[0].values == {"網格代碼": "A1", "類型": "residential"}
    assert rows[0].line == 2


def test_decode_rows_skips_empty_lines_but_keeps_line_numbers() -> None:
    rows = decode_rows("code,name\n\nA1,first\n\n\nA2,second\n")

    assert [row.get("code") for row in rows] == ["A1", "A2"]
    assert [row.line for row in rows] == [3, 6]


def test_decode_rows_accepts_quoted_commas_and_newlines() -> None:
    rows = decode_rows('title,body\n"Notice","line one\nline two, with comma"\nNext,plain\n')

    assert rows[0].get("body") == "line one\nline two, with comma"
    assert rows[1].line == 4


def test_decode_rows_handles_crlf() -> None:
    rows = decode_rows("a,b\r\n1,2\r\n")

    assert rows[0].values == {"a": "1", "b": "2"}


def test_decode_rows_header_only_yields_no_rows() -> None:
    assert decode_rows("a,b\n") == []


def test_decode_rows_rejects_empty_document() -> None:
    with pytest.raises(MalformedCsvError):
        decode_rows("\n\n")


def test_decode_rows_rejects_unbalanced_quotes() -> None:
    with pytest.raises(MalformedCsvError):
        decode_rows('a,b\n"unterminated,2\n')


def test_decode_rows_rejects_duplicate_headers() -> None:
    with pytest.raises(MalformedCsvError) as exc:
        decode_rows("ID,ID\n1,2\n")

    assert exc.value.line == 1


def test_decode_rows_rejects_ragged_records() -> None:
    with pytest.raises(MalformedCsvError) as exc:
        decode_rows("a,b\n1,2\n3\n")

    assert exc.value.line == 3


def test_encode_rows_writes_header_labels_in_column_order() -> None:
    columns = (Column("code", "網格代碼"), Column("note", "備註"), Column("count", "數量"))

    text = encode_rows(columns, [{"code": "A1", "note": "has, comma", "count": 3, "extra": "x"}])

    assert text == '網格代碼,備註,數量\nA1,"has, comma",3\n'


def test_encode_rows_renders_missing_and_none_as_empty() -> None:
    columns = (Column("a", "A"), Column("b", "B"))

    assert encode_rows(columns, [{"a": None}]) == "A,B\n,\n"


def test_encoded_text_decodes_back() -> None:
    columns = (Column("title", "標題"), Column("body", "內容"))
    text = encode_rows(columns, [{"title": "通知", "body": 'quote " inside'}])

    rows = decode_rows(text)

    assert rows[0].values == {"標題": "通知", "內容": 'quote " inside'}
