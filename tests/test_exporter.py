"""Tests for the Excel exporter."""

from openpyxl import load_workbook

from ftv_alarm_toolkit.exporter import build_workbook, export_rows
from ftv_alarm_toolkit.models import AlarmRow


_ROWS = [
    AlarmRow("Line1.Fault.0", "Motor overload"),
    AlarmRow("Line1.Fault.1", ""),
    AlarmRow("Line1.Stop.4", "E-stop pressed"),
]


class TestBuildWorkbook:
    def test_sheet_and_headers(self):
        ws = build_workbook(_ROWS).active
        assert ws.title == "Alarm Tags"
        assert ws["A1"].value == "Tag"
        assert ws["B1"].value == "Description"

    def test_rows_in_order(self):
        ws = build_workbook(_ROWS).active
        assert [ws.cell(row=r, column=1).value for r in range(2, 5)] == [
            "Line1.Fault.0", "Line1.Fault.1", "Line1.Stop.4",
        ]
        assert ws["B2"].value == "Motor overload"

    def test_header_style(self):
        ws = build_workbook(_ROWS).active
        assert ws["A1"].font.bold
        assert ws["A1"].fill.fgColor.rgb.endswith("333F48")
        assert ws["A1"].border.bottom.style == "thick"

    def test_zebra_stripes(self):
        ws = build_workbook(_ROWS).active
        assert ws["A2"].fill.fgColor.rgb.endswith("F4F6F8")
        assert ws["B4"].fill.fgColor.rgb.endswith("F4F6F8")
        assert ws["A3"].fill.fill_type is None

    def test_grid_borders(self):
        ws = build_workbook(_ROWS).active
        assert ws["A3"].border.left.style == "medium"
        assert ws["A3"].border.right.style == "thin"
        assert ws["B4"].border.bottom.style == "medium"

    def test_layout(self):
        ws = build_workbook(_ROWS).active
        assert ws.column_dimensions["A"].width == 40
        assert ws.column_dimensions["B"].width == 90
        assert ws.row_dimensions[1].height == 22
        assert ws.freeze_panes == "A2"

    def test_empty(self):
        ws = build_workbook([]).active
        assert ws.max_row == 1
        assert ws["A1"].border.bottom.style == "thick"


class TestExportRows:
    def test_round_trip(self, tmp_path):
        out = tmp_path / "nested" / "dir" / "tags.xlsx"
        assert export_rows(str(out), _ROWS) == 3
        ws = load_workbook(out).active
        assert ws["A4"].value == "Line1.Stop.4"
        assert ws.max_row == 4


class TestTextCells:
    _FORMULA_LIKE = [AlarmRow("=Tag.1", "=== PUMP FAULT ===")]

    def test_equals_sign_stays_text(self):
        ws = build_workbook(self._FORMULA_LIKE).active
        assert ws["A2"].data_type == "s"
        assert ws["B2"].data_type == "s"
        assert ws["B2"].value == "=== PUMP FAULT ==="

    def test_equals_sign_saved_as_text(self, tmp_path):
        out = tmp_path / "text.xlsx"
        export_rows(str(out), self._FORMULA_LIKE)
        ws = load_workbook(out).active
        assert ws["B2"].data_type == "s"
        assert ws["B2"].value == "=== PUMP FAULT ==="
        assert ws["A2"].value == "=Tag.1"
