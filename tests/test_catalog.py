import threading

import pytest

from schedule_viewer.catalog import (
    ScheduleCatalog,
    build_option_groups,
    initialize_engines,
    load_catalog,
)
from schedule_viewer.core import ScheduleKey
from schedule_viewer.engines import YamlScheduleEngine
from schedule_viewer.errors import CatalogError, LayoutError


class FakeLayout:
    def __init__(self, error=None):
        self.error = error
        self.initialized = threading.Event()

    def initialize(self):
        self.initialized.set()
        if self.error:
            raise self.error

    def render(self, document, output_format="svg"):
        return document


def test_option_groups_keep_order_and_flags():
    catalog = ScheduleCatalog(main=("PreUpdate", "Update"), other=("Startup",), render=("Render",))
    groups = build_option_groups(catalog)

    assert [group.label for group in groups] == ["Main", "Other", "Render"]
    assert [option.key for option in groups[0].options] == [
        ScheduleKey("PreUpdate", False),
        ScheduleKey("Update", False),
    ]
    assert groups[1].options[0].key == ScheduleKey("Startup", False)
    assert groups[2].options[0].key == ScheduleKey("Render", True)
    assert groups[2].options[0].label == "Render"


def test_option_groups_keep_same_name_in_both_apps_apart():
    catalog = ScheduleCatalog(main=("Main",), render=("Main",))
    main_group, _, render_group = build_option_groups(catalog)
    assert main_group.options[0].key != render_group.options[0].key


def test_catalog_contains():
    catalog = ScheduleCatalog(main=("Update",), other=("Startup",), render=("Extract",))
    assert catalog.contains(ScheduleKey("Startup", False))
    assert catalog.contains(ScheduleKey("Extract", True))
    assert not catalog.contains(ScheduleKey("Extract", False))
    assert not catalog.contains(ScheduleKey("Update", True))


def test_load_catalog_from_engine(dump_path):
    engine = YamlScheduleEngine(dump_path)
    layout = FakeLayout()
    initialize_engines(engine, layout)

    catalog = load_catalog(engine)
    assert layout.initialized.is_set()
    assert catalog == ScheduleCatalog(
        main=("PreUpdate", "Update"),
        other=("Startup",),
        render=("ExtractSchedule",),
    )


def test_load_catalog_propagates_failure(dump_path):
    with pytest.raises(CatalogError):
        load_catalog(YamlScheduleEngine(dump_path))


def test_initialize_engines_waits_for_both_and_raises(dump_path):
    engine = YamlScheduleEngine(dump_path)
    layout = FakeLayout(error=LayoutError("dot missing"))
    with pytest.raises(LayoutError):
        initialize_engines(engine, layout)
    assert engine.main_schedules() == ["PreUpdate", "Update"]
