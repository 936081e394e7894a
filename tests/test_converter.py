"""Tests for multi-file conversion runs."""

import pytest

from ftv_alarm_toolkit.converter import (
    ConversionOptions, ConversionResult, collect_input_files, convert_files,
    default_output_path, export_files, filter_rows,
)
from ftv_alarm_toolkit.models import AlarmRow


_LINE1_XML = """\
<?xml version="1.0" encoding="UTF-8"?>
<alarms>
  <trigger id="T1" type="bit" exp="{Line1.Fault}"/>
  <trigger id="T2" type="bit" exp="{Line1.Warn}"/>
  <message trigger="#T1" trigger-value="3" text="[WARN] Motor overload"/>
  <message trigger="#T1" trigger-value="1" text=""/>
  <message trigger="#T2" trigger-value="2" text="   "/>
</alarms>
"""

# Same trigger id as line 1, different address: must not leak across files.
_LINE2_XML = """\
<?xml version="1.0" encoding="UTF-8"?>
<alarms>
  <trigger id="T1" type="digital" exp="{Line2.Stop.5}"/>
  <message trigger="#T1" text="E-stop pressed"/>
  <message trigger="#T2" trigger-value="1" text="Not defined here"/>
</alarms>
"""


@pytest.fixture
def exports(tmp_path):
    one = tmp_path / "Line1.xml"
    two = tmp_path / "Line2.XML"
    one.write_text(_LINE1_XML, encoding="utf-8")
    two.write_text(_LINE2_XML, encoding="utf-8")
    return [str(one), str(two)]


class TestCollectInputFiles:
    def test_keeps_xml(self, exports):
        assert collect_input_files(exports) == exports

    def test_drops_non_xml_and_missing(self, tmp_path, exports):
        txt = tmp_path / "notes.txt"
        txt.write_text("x")
        paths = [str(txt), str(tmp_path / "missing.xml"), exports[0]]
        assert collect_input_files(paths) == [exports[0]]

    def test_dedupes_case_insensitive(self, tmp_path):
        lower = tmp_path / "dup.xml"
        upper = tmp_path / "DUP.xml"
        lower.write_text("<a/>")
        upper.write_text("<a/>")
        assert collect_input_files([str(lower), str(upper)]) == [str(lower)]

    def test_skips_existing(self, exports):
        assert collect_input_files(exports, existing=[exports[0]]) == [exports[1]]

    def test_directory_expanded(self, tmp_path, exports):
        (tmp_path / "readme.md").write_text("x")
        assert collect_input_files([str(tmp_path)]) == sorted(exports)

    def test_blank_path(self):
        assert collect_input_files(["", "   "]) == []


class TestDefaultOutputPath:
    def test_next_to_first(self, tmp_path):
        first = str(tmp_path / "a.xml")
        assert default_output_path(first) == str(tmp_path / "Alarm_Tags.xlsx")


class TestFilterRows:
    def test_keep_all(self):
        rows = [AlarmRow("A", ""), AlarmRow("B", "b")]
        assert filter_rows(rows, False) == rows

    def test_drop_blank(self):
        rows = [AlarmRow("A", ""), AlarmRow("B", "b"), AlarmRow("C", "  ")]
        assert filter_rows(rows, True) == [AlarmRow("B", "b")]


class TestConvertFiles:
    def test_combined_and_sorted(self, exports):
        result = convert_files(exports)
        assert [r.tag for r in result.rows] == [
            "Line1.Fault.0", "Line1.Fault.2", "Line1.Warn.1", "Line2.Stop.4",
        ]
        assert result.total_rows == 4
        assert result.exported_rows == 4
        assert result.skipped_rows == 0
        assert result.ok

    def test_input_order_does_not_matter(self, exports):
        forward = convert_files(exports).rows
        backward = convert_files(list(reversed(exports))).rows
        assert forward == backward

    def test_sequential_matches_parallel(self, exports):
        seq = convert_files(exports, ConversionOptions(max_workers=1))
        par = convert_files(exports, ConversionOptions(max_workers=4))
        assert seq.rows == par.rows

    def test_ignore_blank_descriptions(self, exports):
        result = convert_files(exports, ConversionOptions(ignore_blank_descriptions=True))
        assert result.total_rows == 4
        assert result.exported_rows == 2
        assert result.skipped_rows == 2
        assert result.summary() == "Rows exported: 2 / 4 (skipped 2)"

    def test_failure_isolated(self, tmp_path, exports):
        bad = tmp_path / "bad.xml"
        bad.write_text("<alarms><trigger></alarms>", encoding="utf-8")
        result = convert_files([exports[0], str(bad), exports[1]])
        assert not result.ok
        assert list(result.failures) == [str(bad)]
        assert result.total_rows == 4

    def test_missing_file_recorded(self, tmp_path):
        missing = str(tmp_path / "gone.xml")
        result = convert_files([missing])
        assert missing in result.failures
        assert result.summary() == "No rows parsed yet."

    def test_no_files(self):
        result = convert_files([])
        assert result.rows == [] and result.ok

    def test_to_dict(self, exports):
        d = convert_files(exports).to_dict(include_rows=True)
        assert d["exported_rows"] == 4
        assert d["rows"][0] == {"tag": "Line1.Fault.0", "description": ""}
        assert "rows" not in ConversionResult().to_dict()


class TestExportFiles:
    def test_writes_workbook(self, tmp_path, exports):
        out = tmp_path / "out" / "Alarm_Tags.xlsx"
        result = export_files(exports, str(out))
        assert out.is_file()
        assert result.exported_rows == 4

    def test_requires_inputs(self, tmp_path):
        with pytest.raises(ValueError):
            export_files([], str(tmp_path / "x.xlsx"))

    def test_requires_output(self, exports):
        with pytest.raises(ValueError):
            export_files(exports, "  ")
