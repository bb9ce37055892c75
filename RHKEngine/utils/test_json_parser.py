"""
Tests for RobustJSONParser.

Run:
    python -m pytest RHKEngine/utils/test_json_parser.py -v
"""

import pytest

from RHKEngine.utils.json_parser import JSONParseError, RobustJSONParser


class TestRobustJSONParser:
    """RobustJSONParser.parse"""

    def setup_method(self):
        self.parser = RobustJSONParser()

    def test_plain_object(self):
        assert self.parser.parse('{"chosenTitle": "Literasi"}') == {"chosenTitle": "Literasi"}

    def test_markdown_fence(self):
        raw = 'Berikut hasilnya:\n```json\n{"caption": "Foto kegiatan"}\n```'
        assert self.parser.parse(raw) == {"caption": "Foto kegiatan"}

    def test_thinking_block_and_trailing_text(self):
        raw = '<thinking>menimbang judul</thinking>{"a": {"b": "}"}} selesai.'
        assert self.parser.parse(raw) == {"a": {"b": "}"}}

    def test_trailing_comma(self):
        assert self.parser.parse('{"sections": [1, 2,],}') == {"sections": [1, 2]}

    def test_raw_newline_inside_string(self):
        assert self.parser.parse('{"caption": "baris satu\nbaris dua"}') == {"caption": "baris satu\nbaris dua"}

    def test_json_repair_fallback(self):
        data = self.parser.parse('{"chosenTitle": "Literasi", "activityType": "Kokurikuler"')
        assert data["chosenTitle"] == "Literasi"
        assert data["activityType"] == "Kokurikuler"

    def test_empty_response(self):
        with pytest.raises(JSONParseError):
            self.parser.parse("   ")

    def test_non_object_rejected(self):
        with pytest.raises(JSONParseError) as exc_info:
            self.parser.parse("[1, 2, 3]")
        assert exc_info.value.raw_text == "[1, 2, 3]"

    def test_unparseable_without_repair(self):
        parser = RobustJSONParser(enable_json_repair=False)
        with pytest.raises(JSONParseError) as exc_info:
            parser.parse('{"chosenTitle": ')
        assert exc_info.value.raw_text == '{"chosenTitle": '

    def test_missing_expected_keys_only_logged(self):
        data = self.parser.parse('{"caption": "x"}', expected_keys=["chosenTitle"])
        assert data == {"caption": "x"}
