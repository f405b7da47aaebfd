import pytest

from schedule_viewer.catalog import ScheduleCatalog
from schedule_viewer.core import ScheduleKey, decode_query, initial_selection
from schedule_viewer.errors import GraphGenerationError
from schedule_viewer.settings import ViewerSettings


CATALOG = ScheduleCatalog(main=("PreUpdate", "Update"), other=("Startup",), render=("Extract",))


class FakeGraphEngine:
    def __init__(self):
        self.calls = []

    def generate(self, schedule_name, render_app, include, exclude):
        self.calls.append((schedule_name, render_app, include, exclude))
        if not CATALOG.contains(ScheduleKey(schedule_name, render_app)):
            app = "render app" if render_app else "app"
            raise GraphGenerationError(f"schedule '{schedule_name}' not found in {app}")
        return f"digraph {schedule_name} {{}}"


class FakeLayoutEngine:
    def render(self, document, output_format="svg"):
        width = 20 + len(document)
        return (
            f'<svg xmlns="http://www.w3.org/2000/svg" width="{width}" height="20">'
            f'<rect width="{width}" height="20" fill="white"/></svg>'
        )


class MessageBoxRecorder:
    messages = []

    @classmethod
    def critical(cls, parent, title, text):
        cls.messages.append((title, text))


@pytest.fixture
def make_window(qapp, monkeypatch: pytest.MonkeyPatch):
    from schedule_viewer.gui import app

    MessageBoxRecorder.messages = []
    monkeypatch.setattr(app, "QMessageBox", MessageBoxRecorder)
    windows = []

    def build(link: str):
        graph = FakeGraphEngine()
        window = app.ViewerWindow(
            graph,
            FakeLayoutEngine(),
            CATALOG,
            initial_selection(decode_query(link)),
            ViewerSettings(_env_file=None),
        )
        windows.append(window)
        return window, graph

    yield build
    for window in windows:
        window.close()
        window.deleteLater()


def test_link_selection_reaches_controls_and_diagram(make_window):
    window, graph = make_window("?schedule=Update&include=physics")

    assert window.selection_panel.current_key() == ScheduleKey("Update", False)
    assert window.selection_panel.include_edit.text() == "physics"
    assert window.selection_panel.exclude_edit.text() == ""
    assert graph.calls == [("Update", False, "physics", "")]
    assert window.diagram_view.has_diagram
    assert window.pipeline.last_diagram.selection == window.selection_model.state
    assert window.save_diagram_action.isEnabled()
    assert MessageBoxRecorder.messages == []


def test_missing_link_uses_default_schedule(make_window):
    window, graph = make_window("")
    assert window.selection_panel.current_key() == ScheduleKey("PreUpdate", False)
    assert graph.calls == [("PreUpdate", False, "", "")]


def test_panel_edits_start_a_cycle(make_window):
    window, graph = make_window("?schedule=Update")
    panel = window.selection_panel

    panel.include_edit.setText("ui")
    assert graph.calls[-1] == ("Update", False, "ui", "")

    panel.schedule_combo.setCurrentIndex(panel.index_for(ScheduleKey("Extract", True)))
    assert graph.calls[-1] == ("Extract", True, "ui", "")
    assert window.selection_model.schedule == ScheduleKey("Extract", True)
    assert "renderApp=true" in window.share_controller.current_link()


def test_unknown_link_schedule_leaves_combo_empty(make_window):
    window, graph = make_window("?schedule=Missing&renderApp=true")

    assert window.selection_panel.schedule_combo.currentIndex() == -1
    assert graph.calls == [("Missing", True, "", "")]
    assert MessageBoxRecorder.messages == [("Generate", "schedule 'Missing' not found in render app")]
    assert window.pipeline.last_diagram is None
    assert not window.save_diagram_action.isEnabled()
    assert "Unknown schedule 'Missing'" in window.statusBar().currentMessage()


def test_failed_cycle_keeps_displayed_diagram(make_window):
    window, _ = make_window("?schedule=Update")
    shown = window.diagram_view.serialize()
    previous = window.pipeline.last_diagram

    window.selection_model.set_schedule(ScheduleKey("Missing"))

    assert MessageBoxRecorder.messages == [("Generate", "schedule 'Missing' not found in app")]
    assert window.diagram_view.serialize() == shown
    assert window.pipeline.last_diagram is previous
    assert window.selection_panel.schedule_combo.currentIndex() == -1
