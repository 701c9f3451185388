"""
Tests for line segmentation and field splitting.
"""

import pytest

from csv2json.models import ConverterConfig
from csv2json.tokenizer import collect_lines, detect_delimiter, resolve_delimiter, split_fields


class TestSplitFields:

    def test_simple_split(self):
        assert split_fields("a,b,c", ",") == ["a", "b", "c"]

    def test_empty_fields(self):
        assert split_fields(",,", ",") == ["", "", ""]

    def test_empty_line_is_single_field(self):
        assert split_fields("", ",") == [""]

    def test_quotes_are_removed_and_protect_delimiters(self):
        assert split_fields('"a,b",c', ",") == ["a,b", "c"]

    def test_doubled_quote_inside_quotes(self):
        assert split_fields('"say ""hi""",x', ",") == ['say "hi"', "x"]

    def test_escape_takes_precedence_over_quote(self):
        assert split_fields('a\\"b,c', ",") == ['a"b', "c"]

    def test_trailing_escape_is_literal(self):
        assert split_fields("a\\", ",") == ["a\\"]

    def test_disabled_escape_keeps_backslashes(self):
        assert split_fields("C:\\temp,x", ",", escape_char="") == ["C:\\temp", "x"]

    def test_alternative_quote_char(self):
        assert split_fields("'a,b',c", ",", quote_char="'") == ["a,b", "c"]

    def test_multi_character_delimiter(self):
        assert split_fields("a::b::c", "::") == ["a", "b", "c"]


class TestDelimiterResolution:

    @pytest.mark.parametrize(
        "name,expected",
        [("comma", ","), ("semicolon", ";"), ("tab", "\t"), ("pipe", "|"), ("space", " ")],
    )
    def test_named(self, name, expected):
        assert resolve_delimiter(ConverterConfig(delimiter=name)) == expected

    def test_custom(self):
        config = ConverterConfig(delimiter="custom", custom_delimiter="#")
        assert resolve_delimiter(config) == "#"

    def test_custom_blank_resolves_empty(self):
        assert resolve_delimiter(ConverterConfig(delimiter="custom")) == ""

    def test_auto(self):
        assert resolve_delimiter(ConverterConfig(delimiter="auto"), "a|b|c\n1|2|3") == "|"

    def test_detect_prefers_most_frequent(self):
        assert detect_delimiter("a\tb\tc,d") == "\t"

    def test_detect_falls_back_to_comma(self):
        assert detect_delimiter("single") == ","

    def test_detect_only_samples_first_lines(self):
        text = "a;b\n1;2\n3;4\n5;6\n7;8\n" + "x,y,z,w,v,u,t,s,r,q\n" * 3
        assert detect_delimiter(text) == ";"


class TestCollectLines:

    def test_keeps_physical_line_numbers(self):
        collected = collect_lines("a\n\nb\r\nc", ConverterConfig())
        assert collected.lines == [(1, "a"), (3, "b"), (4, "c")]
        assert collected.empty_skipped == 1
        assert not collected.limit_reached

    def test_cap_counts_header_row(self):
        collected = collect_lines("h\n1\n2\n3", ConverterConfig(max_rows=2))
        assert [line for _, line in collected.lines] == ["h", "1", "2"]
        assert collected.limit_reached

    def test_cap_reached_exactly(self):
        collected = collect_lines("h\n1\n\n", ConverterConfig(max_rows=1))
        assert [line for _, line in collected.lines] == ["h", "1"]
        assert collected.limit_reached

    def test_cap_not_reached(self):
        collected = collect_lines("h\n1", ConverterConfig(max_rows=2))
        assert not collected.limit_reached

    def test_no_skipping_keeps_blank_lines(self):
        collected = collect_lines("a\n\nb", ConverterConfig(skip_empty_lines=False))
        assert [line for _, line in collected.lines] == ["a", "", "b"]
        assert collected.empty_skipped == 0
