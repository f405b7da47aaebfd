"""PySide6 main window for browsing schedule graphs."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from PySide6.QtCore import Qt
from PySide6.QtGui import QAction, QColor, QKeySequence, QPalette
from PySide6.QtWidgets import (
    QApplication,
    QHBoxLayout,
    QLabel,
    QMainWindow,
    QMessageBox,
    QToolBar,
    QVBoxLayout,
    QWidget,
)

from ..catalog import ScheduleCatalog, build_option_groups, initialize_engines, load_catalog
from ..core.codec import decode_query, initial_selection
from ..core.selection import ScheduleKey, SelectionState
from ..engines import GraphEngine, GraphvizLayoutEngine, LayoutEngine, YamlScheduleEngine, graph_settings_from
from ..exporters import DiagramExporter
from ..pipeline import PipelineState, RegenerationPipeline, RenderedDiagram
from ..settings import ViewerSettings, get_settings
from .canvas import DiagramView
from .controllers import ExportController, ShareController
from .models import SelectionModel
from .widgets import LinkBar, SelectionPanel


logger = logging.getLogger(__name__)


class ViewerWindow(QMainWindow):
    def __init__(
        self,
        graph_engine: GraphEngine,
        layout_engine: LayoutEngine,
        catalog: ScheduleCatalog,
        initial: SelectionState,
        settings: ViewerSettings,
    ):
        super().__init__()
        self.setWindowTitle("Schedule Viewer")
        self.resize(1400, 860)
        self.settings = settings
        self.catalog = catalog

        self.selection_model = SelectionModel(parent=self)
        self._setup_ui()

        self.pipeline = RegenerationPipeline(
            graph_engine,
            layout_engine,
            self.diagram_view,
            self.selection_model,
            output_format=settings.output_format,
            parent=self,
        )
        self.exporter = DiagramExporter(self.pipeline, release_delay_ms=settings.export_release_delay_ms)
        self.export_controller = ExportController(self, self.exporter)
        self.share_controller = ShareController(
            self.selection_model,
            settings.share_base_url,
            QApplication.clipboard(),
            self.link_bar,
        )

        self.selection_panel.set_option_groups(build_option_groups(catalog))
        self._connect_signals()
        self._update_action_states()

        if not catalog.contains(initial.schedule):
            logger.warning("Linked schedule %s is not in the catalog", initial.schedule.composite)
        self.pipeline.bind()
        self.selection_model.replace(initial)

    def _setup_ui(self) -> None:
        self._create_actions()
        central = QWidget()
        self.setCentralWidget(central)
        layout = QVBoxLayout(central)
        layout.setContentsMargins(6, 6, 6, 6)

        link_row = QHBoxLayout()
        link_row.addWidget(QLabel("Link"))
        self.link_bar = LinkBar()
        link_row.addWidget(self.link_bar, 1)
        layout.addLayout(link_row)

        self.selection_panel = SelectionPanel()
        layout.addWidget(self.selection_panel)

        self.diagram_view = DiagramView()
        layout.addWidget(self.diagram_view, 1)

        toolbar = QToolBar("View")
        toolbar.setMovable(False)
        for action in (
            self.zoom_in_action,
            self.zoom_out_action,
            self.fit_view_action,
            None,
            self.open_in_tab_action,
            self.save_diagram_action,
            self.share_action,
        ):
            if action is None:
                toolbar.addSeparator()
            else:
                toolbar.addAction(action)
        self.addToolBar(Qt.ToolBarArea.TopToolBarArea, toolbar)

        self.statusBar().showMessage("Ready")
        self._build_menu_bar()

    def _create_actions(self) -> None:
        """Instantiate reusable actions shared between menus and the toolbar."""
        self.zoom_in_action = QAction("Zoom In", self)
        self.zoom_in_action.setShortcut(QKeySequence.StandardKey.ZoomIn)
        self.zoom_in_action.triggered.connect(lambda: self.diagram_view.zoom_in())

        self.zoom_out_action = QAction("Zoom Out", self)
        self.zoom_out_action.setShortcut(QKeySequence.StandardKey.ZoomOut)
        self.zoom_out_action.triggered.connect(lambda: self.diagram_view.zoom_out())

        self.fit_view_action = QAction("Fit", self)
        self.fit_view_action.setShortcut(QKeySequence("Ctrl+0"))
        self.fit_view_action.triggered.connect(lambda: self.diagram_view.fit())

        self.open_in_tab_action = QAction("Open in Browser", self)
        self.open_in_tab_action.setShortcut(QKeySequence("Ctrl+Shift+O"))
        self.open_in_tab_action.triggered.connect(lambda: self.export_controller.open_in_new_tab())

        self.save_diagram_action = QAction("Save Diagram...", self)
        self.save_diagram_action.setShortcut(QKeySequence.StandardKey.Save)
        self.save_diagram_action.triggered.connect(lambda: self.export_controller.save_dialog())

        self.share_action = QAction("Share Link", self)
        self.share_action.setShortcut(QKeySequence("Ctrl+L"))
        self.share_action.triggered.connect(self._share)

    def _build_menu_bar(self) -> None:
        menu_bar = self.menuBar()

        file_menu = menu_bar.addMenu("File")
        file_menu.addAction(self.open_in_tab_action)
        file_menu.addAction(self.save_diagram_action)
        file_menu.addAction(self.share_action)
        file_menu.addSeparator()
        quit_action = QAction("Quit", self)
        quit_action.setShortcut(QKeySequence.StandardKey.Quit)
        quit_action.triggered.connect(QApplication.instance().quit)  # type: ignore[attr-defined]
        file_menu.addAction(quit_action)

        view_menu = menu_bar.addMenu("View")
        view_menu.addAction(self.zoom_in_action)
        view_menu.addAction(self.zoom_out_action)
        view_menu.addAction(self.fit_view_action)

    def _connect_signals(self) -> None:
        self.selection_panel.schedule_changed.connect(self.selection_model.set_schedule)
        self.selection_panel.include_changed.connect(self.selection_model.set_include)
        self.selection_panel.exclude_changed.connect(self.selection_model.set_exclude)
        self.selection_model.changed.connect(self.selection_panel.sync)

        self.pipeline.diagram_changed.connect(self._on_diagram_changed)
        self.pipeline.error_occurred.connect(self._on_generation_failed)
        self.pipeline.state_changed.connect(self._on_pipeline_state_changed)

    def _update_action_states(self) -> None:
        has_diagram = self.pipeline.last_diagram is not None
        self.open_in_tab_action.setEnabled(has_diagram)
        self.save_diagram_action.setEnabled(has_diagram)

    def _on_diagram_changed(self, diagram: RenderedDiagram) -> None:
        self._update_action_states()
        label = diagram.selection.schedule_name
        if diagram.selection.render_app:
            label = f"{label} (render app)"
        self.setWindowTitle(f"Schedule Viewer - {label}")
        self.statusBar().showMessage(f"Showing {label}")

    def _on_generation_failed(self, message: str) -> None:
        schedule = self.selection_model.schedule
        if self.catalog.contains(schedule):
            self.statusBar().showMessage("Generation failed; showing previous diagram")
        else:
            self.statusBar().showMessage(f"Unknown schedule '{schedule.name}'; showing previous diagram")
        QMessageBox.critical(self, "Generate", message)

    def _on_pipeline_state_changed(self, state: PipelineState) -> None:
        if state is PipelineState.RENDERING:
            self.statusBar().showMessage("Rendering...")

    def _share(self) -> None:
        link = self.share_controller.share()
        self.statusBar().showMessage(f"Link copied: {link}")


def apply_dark_palette(app: QApplication) -> None:
    app.setStyle("Fusion")
    dark_palette = QPalette()
    dark_palette.setColor(QPalette.ColorRole.Window, QColor(53, 53, 53))
    dark_palette.setColor(QPalette.ColorRole.WindowText, QColor(255, 255, 255))
    dark_palette.setColor(QPalette.ColorRole.Base, QColor(35, 35, 35))
    dark_palette.setColor(QPalette.ColorRole.AlternateBase, QColor(53, 53, 53))
    dark_palette.setColor(QPalette.ColorRole.ToolTipBase, QColor(25, 25, 25))
    dark_palette.setColor(QPalette.ColorRole.ToolTipText, QColor(255, 255, 255))
    dark_palette.setColor(QPalette.ColorRole.Text, QColor(255, 255, 255))
    dark_palette.setColor(QPalette.ColorRole.Button, QColor(53, 53, 53))
    dark_palette.setColor(QPalette.ColorRole.ButtonText, QColor(255, 255, 255))
    dark_palette.setColor(QPalette.ColorRole.BrightText, QColor(255, 0, 0))
    dark_palette.setColor(QPalette.ColorRole.Link, QColor(42, 130, 218))
    dark_palette.setColor(QPalette.ColorRole.Highlight, QColor(42, 130, 218))
    dark_palette.setColor(QPalette.ColorRole.HighlightedText, QColor(35, 35, 35))
    app.setPalette(dark_palette)


def run(dump_path: Path, link: Optional[str] = None, settings: Optional[ViewerSettings] = None) -> int:
    settings = settings or get_settings()
    app = QApplication.instance() or QApplication([])
    apply_dark_palette(app)

    graph_engine = YamlScheduleEngine(dump_path, graph_settings=graph_settings_from(settings))
    layout_engine = GraphvizLayoutEngine(settings.layout_program)
    initialize_engines(graph_engine, layout_engine)
    catalog = load_catalog(graph_engine)

    initial = initial_selection(
        decode_query(link or ""),
        default=ScheduleKey(settings.default_schedule, render_app=False),
    )
    window = ViewerWindow(graph_engine, layout_engine, catalog, initial, settings)
    window.show()
    return app.exec()
