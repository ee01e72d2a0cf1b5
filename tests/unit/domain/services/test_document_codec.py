"""Tests for DocumentCodec."""

import pytest

from doclite.domain.entities import Document, PageResult
from doclite.domain.exceptions import DocumentDecodeError, MalformedInputError
from doclite.domain.services import DocumentCodec


class TestDecode:
    """Tests for decoding stored payloads."""

    def test_decode_object(self):
        assert DocumentCodec.decode('{"name":"gear","size":3}') == {"name": "gear", "size": 3}

    def test_decode_empty_object(self):
        assert DocumentCodec.decode("{}") == {}

    def test_decode_preserves_key_order(self):
        assert list(DocumentCodec.decode('{"b":1,"a":2}')) == ["b", "a"]

    def test_decode_none_raises(self):
        with pytest.raises(DocumentDecodeError):
            DocumentCodec.decode(None)

    def test_decode_invalid_json_raises(self):
        with pytest.raises(DocumentDecodeError) as exc_info:
            DocumentCodec.decode("{not json")
        assert "not valid JSON" in str(exc_info.value)

    @pytest.mark.parametrize("raw", ["[1,2]", '"text"', "42", "null"])
    def test_decode_non_object_raises(self, raw):
        with pytest.raises(DocumentDecodeError) as exc_info:
            DocumentCodec.decode(raw)
        assert "expected an object" in str(exc_info.value)


class TestEncode:
    """Tests for encoding document data."""

    def test_encode_is_compact(self):
        assert DocumentCodec.encode({"a": 1, "b": [1, 2]}) == '{"a":1,"b":[1,2]}'

    def test_encode_keeps_unicode(self):
        assert DocumentCodec.encode({"name": "café"}) == '{"name":"café"}'


class TestParseBody:
    """Tests for parsing request bodies."""

    def test_parse_object(self):
        assert DocumentCodec.parse_body(b'{"name":"gear"}') == {"name": "gear"}

    def test_parse_nested(self):
        body = b'{"a":{"b":[1,{"c":null}]}}'
        assert DocumentCodec.parse_body(body) == {"a": {"b": [1, {"c": None}]}}

    @pytest.mark.parametrize("body", [b"", b"{", b"not json", b"\xff\xfe"])
    def test_parse_invalid_json_raises(self, body):
        with pytest.raises(MalformedInputError):
            DocumentCodec.parse_body(body)

    @pytest.mark.parametrize("body", [b"[]", b"1", b'"x"', b"null", b"true"])
    def test_parse_non_object_raises(self, body):
        with pytest.raises(MalformedInputError) as exc_info:
            DocumentCodec.parse_body(body)
        assert "must be a JSON object" in str(exc_info.value)

    @pytest.mark.parametrize(
        "body", [b'{"a": NaN}', b'{"a": Infinity}', b'{"a": [1, -Infinity]}']
    )
    def test_parse_non_standard_constants_raises(self, body):
        with pytest.raises(MalformedInputError) as exc_info:
            DocumentCodec.parse_body(body)
        assert "is not valid JSON" in str(exc_info.value)


class TestEnvelopes:
    """Tests for response envelope construction."""

    def test_item_envelope(self):
        envelope = DocumentCodec.build_item_envelope(
            "abc", {"name": "gear"}, "2024-01-01T00:00:00.000000Z", "2024-01-02T00:00:00.000000Z"
        )
        assert envelope == {
            "id": "abc",
            "data": {"name": "gear"},
            "created": "2024-01-01T00:00:00.000000Z",
            "updated": "2024-01-02T00:00:00.000000Z",
        }

    def test_page_envelope_has_more(self):
        envelope = DocumentCodec.build_page_envelope([], total=25, limit=10, offset=10)
        assert envelope["has_more"] is True
        assert envelope["total_items"] == 25

    def test_page_envelope_last_page(self):
        envelope = DocumentCodec.build_page_envelope([], total=25, limit=10, offset=20)
        assert envelope["has_more"] is False

    def test_page_envelope_offset_past_end(self):
        envelope = DocumentCodec.build_page_envelope([], total=3, limit=10, offset=50)
        assert envelope == {
            "items": [],
            "total_items": 3,
            "limit": 10,
            "offset": 50,
            "has_more": False,
        }

    def test_from_row_and_envelope(self):
        row = {
            "id": "abc",
            "data": '{"x":1}',
            "created": "2024-01-01T00:00:00.000000Z",
            "updated": "2024-01-01T00:00:00.000000Z",
        }
        document = DocumentCodec.from_row(row)
        assert document == Document(
            id="abc",
            data={"x": 1},
            created="2024-01-01T00:00:00.000000Z",
            updated="2024-01-01T00:00:00.000000Z",
        )

        page = PageResult(items=[document], total=1, limit=10, offset=0)
        envelope = DocumentCodec.page_envelope(page)
        assert envelope["items"][0]["data"] == {"x": 1}
        assert envelope["has_more"] is False
