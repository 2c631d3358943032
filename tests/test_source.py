from __future__ import annotations

import pytest

from jslint_runner.source import LintUnit, extract_units, is_markup, read_source


def test_plain_script_is_single_unit():
    text = "var a = 1;\nvar b = 2;\n"
    assert extract_units(text) == [LintUnit(text=text, line_offset=0, column_offset=0)]


def test_script_starting_with_less_than_elsewhere_is_not_markup():
    text = 'var html = "<script>x</script>";'
    assert not is_markup(text)
    assert extract_units(text) == [LintUnit(text=text)]


def test_inline_script_in_markup():
    units = extract_units("<div><script>var a=1</script></div>")
    assert units == [LintUnit(text="var a=1", line_offset=0, column_offset=0)]


def test_line_offset_counts_newlines_before_script_body():
    text = "  <html>\n<head>\n<script type=\"text/javascript\">var a=1</script>\n</head>"
    units = extract_units(text)
    assert len(units) == 1
    assert units[0].text == "var a=1"
    assert units[0].line_offset == 2


def test_multiple_scripts_case_insensitive():
    text = "<html>\n<SCRIPT>one()</SCRIPT>\n<p>\n<script src='x'>two()</script >\n</html>"
    units = extract_units(text)
    assert [unit.text for unit in units] == ["one()", "two()"]
    assert [unit.line_offset for unit in units] == [1, 3]


def test_identical_script_bodies_get_their_own_offsets():
    text = "<p>\n<script>go()</script>\n\n<script>go()</script>"
    assert [unit.line_offset for unit in extract_units(text)] == [1, 3]


def test_indented_script_is_dedented():
    text = "<html>\n  <script>\n    var a = 1;\n      if (a) {}\n  </script>\n</html>"
    units = extract_units(text)
    assert units[0].column_offset == 4
    assert units[0].text == "\nvar a = 1;\n  if (a) {}\n"
    assert units[0].line_offset == 1


def test_less_indented_lines_keep_their_code():
    units = extract_units("<p><script>\n    a();\n  b();\n</script>")
    assert units[0].text == "\na();\nb();\n"
    assert units[0].column_offset == 4


def test_markup_without_scripts_has_no_units():
    assert extract_units("<html><body></body></html>") == []


def test_empty_script_block():
    assert extract_units("<script></script>") == [LintUnit(text="", line_offset=0, column_offset=0)]


def test_read_source(tmp_path):
    path = tmp_path / "a.js"
    path.write_bytes("var s = 'é';\n".encode("utf-8") + b"\xff")
    assert read_source(path).startswith("var s = 'é';")


def test_read_source_missing(tmp_path):
    with pytest.raises(OSError):
        read_source(tmp_path / "missing.js")
