import pytest
from pydantic import ValidationError

from schedule_viewer.engines import graph_settings_from
from schedule_viewer.settings import ViewerSettings, get_settings, reset_settings_cache


def test_defaults():
    settings = ViewerSettings(_env_file=None)
    assert settings.default_schedule == "PreUpdate"
    assert settings.output_format == "svg"
    assert settings.style == "dark_github"
    assert settings.export_release_delay_ms == 5000


def test_environment_override(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setenv("SCHEDULE_VIEWER_DEFAULT_SCHEDULE", " Update ")
    monkeypatch.setenv("SCHEDULE_VIEWER_STYLE", "light")
    reset_settings_cache()
    settings = get_settings()
    assert settings.default_schedule == "Update"
    assert settings.style == "light"
    assert get_settings() is settings


def test_blank_default_schedule_rejected():
    with pytest.raises(ValidationError):
        ViewerSettings(_env_file=None, default_schedule="  ")


def test_unknown_style_rejected():
    with pytest.raises(ValidationError):
        ViewerSettings(_env_file=None, style="neon")


def test_graph_settings_follow_viewer_settings():
    graph_settings = graph_settings_from(
        ViewerSettings(_env_file=None, style="light", rankdir="TD", remove_transitive_edges=False)
    )
    assert graph_settings.style.color_background == "white"
    assert graph_settings.rankdir == "TD"
    assert graph_settings.remove_transitive_edges is False


def test_graph_options_reach_graph_settings(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setenv("SCHEDULE_VIEWER_EDGE_STYLE", "ortho")
    monkeypatch.setenv("SCHEDULE_VIEWER_COLLAPSE_SINGLE_SYSTEM_SETS", "true")
    monkeypatch.setenv("SCHEDULE_VIEWER_AMBIGUITY_ENABLE", "false")
    graph_settings = graph_settings_from(ViewerSettings(_env_file=None))

    assert graph_settings.edge_style == "ortho"
    assert graph_settings.collapse_single_system_sets is True
    assert graph_settings.ambiguity_enable is False
    assert graph_settings.ambiguity_enable_on_world is False
