from pathlib import Path
from unittest import mock

from schedule_viewer import cli


def test_list_prints_grouped_keys(dump_path: Path, capsys):
    assert cli.main(["list", str(dump_path)]) == 0
    out = capsys.readouterr().out.splitlines()
    assert out == [
        "Main:",
        "  PreUpdate:false",
        "  Update:false",
        "Other:",
        "  Startup:false",
        "Render:",
        "  ExtractSchedule:true",
    ]


def test_render_dot_to_file(dump_path: Path, tmp_path: Path):
    output = tmp_path / "graphs" / "update.dot"
    code = cli.main(
        ["render", str(dump_path), "Update", "--include", "detect", "--format", "dot", "--output", str(output)]
    )
    assert code == 0
    source = output.read_text(encoding="utf-8")
    assert source.startswith("digraph Update {")
    assert "integrate" not in source


def test_render_svg_uses_layout_engine(dump_path: Path, capsys):
    with mock.patch("graphviz.pipe_string", return_value="<svg/>") as pipe:
        assert cli.main(["render", str(dump_path), "ExtractSchedule", "--render-app"]) == 0
    assert capsys.readouterr().out == "<svg/>"
    program, fmt, document = pipe.call_args.args
    assert (program, fmt) == ("dot", "svg")
    assert "extract_meshes" in document


def test_render_unknown_schedule_fails(dump_path: Path):
    assert cli.main(["render", str(dump_path), "ExtractSchedule", "--format", "dot"]) == 1


def test_missing_dump_returns_2(tmp_path: Path):
    missing = str(tmp_path / "missing.yaml")
    assert cli.main(["list", missing]) == 2
    assert cli.main(["render", missing, "Update"]) == 2
    assert cli.main(["view", missing]) == 2
