import os
from pathlib import Path

import pytest

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")


SAMPLE_DUMP = """\
main:
  - name: PreUpdate
    sets:
      - name: InputSet
    systems:
      - name: my_game::input::read
        sets: [InputSet]
      - name: my_game::input::map_actions
        sets: [InputSet]
        after: [my_game::input::read]
  - name: Update
    sets:
      - name: PhysicsSet
      - name: CollisionSet
        parents: [PhysicsSet]
    systems:
      - name: my_game::physics::integrate
        sets: [PhysicsSet]
      - name: my_game::physics::detect<bevy::Transform>
        sets: [CollisionSet]
        after: [my_game::physics::integrate]
      - name: my_game::ui::draw
        after: [PhysicsSet]
    ambiguities:
      - [my_game::physics::integrate, my_game::ui::draw, [bevy::Transform]]
      - [my_game::physics::detect<bevy::Transform>, my_game::ui::draw]
other:
  - name: Startup
    systems:
      - name: my_game::setup
render:
  - name: ExtractSchedule
    systems:
      - name: render::extract_meshes
      - name: render::extract_lights
        after: [render::extract_meshes]
"""


@pytest.fixture
def dump_path(tmp_path: Path) -> Path:
    path = tmp_path / "schedules.yaml"
    path.write_text(SAMPLE_DUMP, encoding="utf-8")
    return path


@pytest.fixture(scope="session")
def qapp():
    from PySide6.QtWidgets import QApplication

    app = QApplication.instance() or QApplication([])
    yield app


@pytest.fixture(autouse=True)
def _isolated_settings(monkeypatch: pytest.MonkeyPatch):
    from schedule_viewer.settings import reset_settings_cache

    for name in list(os.environ):
        if name.startswith("SCHEDULE_VIEWER_"):
            monkeypatch.delenv(name)
    reset_settings_cache()
    yield
    reset_settings_cache()
