from pathlib import Path

import pytest
from pydantic import ValidationError

from schedule_viewer.config import ScheduleDefinition, ScheduleDump, load_schedule_dump
from schedule_viewer.errors import CatalogError


def test_load_sample_dump(dump_path: Path):
    dump = load_schedule_dump(dump_path)
    assert [schedule.name for schedule in dump.main] == ["PreUpdate", "Update"]
    assert [schedule.name for schedule in dump.other] == ["Startup"]
    assert [schedule.name for schedule in dump.render] == ["ExtractSchedule"]


def test_missing_file(tmp_path: Path):
    with pytest.raises(FileNotFoundError):
        load_schedule_dump(tmp_path / "missing.yaml")


def test_invalid_yaml(tmp_path: Path):
    path = tmp_path / "broken.yaml"
    path.write_text("main: [unclosed\n", encoding="utf-8")
    with pytest.raises(CatalogError):
        load_schedule_dump(path)


def test_top_level_must_be_mapping(tmp_path: Path):
    path = tmp_path / "list.yaml"
    path.write_text("- a\n- b\n", encoding="utf-8")
    with pytest.raises(CatalogError, match="mapping"):
        load_schedule_dump(path)


def test_empty_groups_are_allowed(tmp_path: Path):
    path = tmp_path / "empty.yaml"
    path.write_text("main:\nother:\n", encoding="utf-8")
    dump = load_schedule_dump(path)
    assert dump.main == [] and dump.other == [] and dump.render == []


def test_validation_error_is_wrapped(tmp_path: Path):
    path = tmp_path / "bad.yaml"
    path.write_text("main:\n  - name: A\n    systems:\n      - name: s\n        sets: [Nope]\n", encoding="utf-8")
    with pytest.raises(CatalogError, match="unknown set"):
        load_schedule_dump(path)


def test_unknown_ordering_target_rejected():
    with pytest.raises(ValidationError, match="unknown node"):
        ScheduleDefinition.model_validate({"name": "A", "systems": [{"name": "s", "after": ["ghost"]}]})


def test_set_and_system_names_must_differ():
    with pytest.raises(ValidationError, match="both a set and a system"):
        ScheduleDefinition.model_validate({"name": "A", "sets": [{"name": "x"}], "systems": [{"name": "x"}]})


def test_set_cycles_rejected():
    with pytest.raises(ValidationError, match="cycle"):
        ScheduleDefinition.model_validate(
            {
                "name": "A",
                "sets": [{"name": "a", "parents": ["b"]}, {"name": "b", "parents": ["a"]}],
            }
        )


def test_duplicate_main_app_schedule_rejected():
    with pytest.raises(ValidationError, match="Duplicate schedule"):
        ScheduleDump.model_validate({"main": [{"name": "Update"}], "other": [{"name": "Update"}]})


def test_render_app_may_reuse_main_app_names():
    dump = ScheduleDump.model_validate({"main": [{"name": "Main"}], "render": [{"name": "Main"}]})
    assert dump.render[0].name == "Main"


def test_ambiguities_accept_sequence_form(dump_path: Path):
    update = next(schedule for schedule in load_schedule_dump(dump_path).main if schedule.name == "Update")
    first, second = update.ambiguities
    assert (first.first, first.second, first.conflicts) == (
        "my_game::physics::integrate",
        "my_game::ui::draw",
        ["bevy::Transform"],
    )
    assert second.conflicts == []


def test_ambiguity_with_unknown_system_rejected():
    with pytest.raises(ValidationError, match="unknown system"):
        ScheduleDefinition.model_validate(
            {"name": "A", "systems": [{"name": "s"}], "ambiguities": [["s", "ghost"]]}
        )


def test_ambiguity_sequence_length_checked():
    with pytest.raises(ValidationError):
        ScheduleDefinition.model_validate({"name": "A", "systems": [{"name": "s"}], "ambiguities": [["s"]]})
