from unittest import mock

import graphviz
import pytest

from schedule_viewer.engines import GraphvizLayoutEngine, YamlScheduleEngine
from schedule_viewer.errors import CatalogError, GraphGenerationError, LayoutError


def test_engine_requires_exactly_one_source(dump_path):
    with pytest.raises(ValueError):
        YamlScheduleEngine()
    with pytest.raises(ValueError):
        YamlScheduleEngine(dump_path, dump=object())


def test_engine_must_be_initialized(dump_path):
    engine = YamlScheduleEngine(dump_path)
    with pytest.raises(CatalogError):
        engine.main_schedules()


def test_engine_lists_groups(dump_path):
    engine = YamlScheduleEngine(dump_path)
    engine.initialize()
    assert engine.main_schedules() == ["PreUpdate", "Update"]
    assert engine.other_schedules() == ["Startup"]
    assert engine.render_schedules() == ["ExtractSchedule"]


def test_generate_finds_other_schedules_in_main_app(dump_path):
    engine = YamlScheduleEngine(dump_path)
    engine.initialize()
    assert "setup" in engine.generate("Startup", False, "", "")


@pytest.mark.parametrize(
    "name, render_app, message",
    [
        ("ExtractSchedule", False, "schedule 'ExtractSchedule' not found in app"),
        ("Update", True, "schedule 'Update' not found in render app"),
    ],
)
def test_generate_reports_unknown_schedule(dump_path, name, render_app, message):
    engine = YamlScheduleEngine(dump_path)
    engine.initialize()
    with pytest.raises(GraphGenerationError) as excinfo:
        engine.generate(name, render_app, "", "")
    assert excinfo.value.message == message


def test_layout_initialize_maps_missing_executable():
    engine = GraphvizLayoutEngine()
    with mock.patch("graphviz.version", side_effect=graphviz.ExecutableNotFound(["dot", "-V"])):
        with pytest.raises(LayoutError):
            engine.initialize()


def test_layout_render_maps_process_failure():
    engine = GraphvizLayoutEngine()
    failure = graphviz.CalledProcessError(1, ["dot"], output=b"", stderr=b"syntax error in line 1")
    with mock.patch("graphviz.pipe_string", side_effect=failure):
        with pytest.raises(LayoutError, match="syntax error"):
            engine.render("digraph {", "svg")


def test_layout_render_returns_markup():
    engine = GraphvizLayoutEngine("neato")
    with mock.patch("graphviz.pipe_string", return_value="<svg/>") as pipe:
        assert engine.render("digraph {}", "svg") == "<svg/>"
    pipe.assert_called_once_with("neato", "svg", "digraph {}", quiet=True)
