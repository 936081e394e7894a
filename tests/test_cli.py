"""Tests for the command line front end."""

import pytest

from ftv_alarm_toolkit import cli


_XML = """\
<alarms>
  <trigger id="T1" type="bit" exp="{Tank.Alarms}"/>
  <message trigger="#T1" trigger-value="5" text="[HI] Tank level high"/>
  <message trigger="#T1" trigger-value="6" text=""/>
</alarms>
"""


@pytest.fixture
def export_file(tmp_path):
    f = tmp_path / "tank.xml"
    f.write_text(_XML, encoding="utf-8")
    return f


class TestMain:
    def test_default_output(self, export_file, capsys):
        assert cli.main([str(export_file)]) == 0
        assert (export_file.parent / "Alarm_Tags.xlsx").is_file()
        out = capsys.readouterr().out
        assert "Exported 2 of 2 rows" in out

    def test_explicit_output_and_filter(self, export_file, tmp_path, capsys):
        out_file = tmp_path / "report.xlsx"
        rc = cli.main([
            str(export_file), "-o", str(out_file), "--ignore-blank-descriptions",
        ])
        assert rc == 0
        assert out_file.is_file()
        assert "Rows exported: 1 / 2 (skipped 1)" in capsys.readouterr().out

    def test_no_inputs_found(self, tmp_path, capsys):
        assert cli.main([str(tmp_path / "nothing.xml")]) == 1
        assert "No XML files" in capsys.readouterr().err

    def test_failure_reported(self, export_file, tmp_path, capsys):
        bad = tmp_path / "bad.xml"
        bad.write_text("<alarms>", encoding="utf-8")
        assert cli.main([str(export_file), str(bad)]) == 1
        assert "FAILED" in capsys.readouterr().err

    def test_bad_workers(self, export_file):
        with pytest.raises(SystemExit) as exc:
            cli.main([str(export_file), "--workers", "0"])
        assert exc.value.code == 2


class TestBuildParser:
    def test_defaults(self):
        args = cli.build_parser().parse_args(["a.xml"])
        assert args.output == ""
        assert not args.ignore_blank_descriptions
        assert args.workers is None
