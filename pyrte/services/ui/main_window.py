from __future__ import annotations

import logging

from PyQt6.QtCore import QByteArray, Qt
from PyQt6.QtGui import QAction, QKeySequence
from PyQt6.QtWidgets import (
    QApplication,
    QComboBox,
    QHBoxLayout,
    QLabel,
    QLineEdit,
    QListWidget,
    QListWidgetItem,
    QMainWindow,
    QMenu,
    QPushButton,
    QSplitter,
    QStatusBar,
    QTextEdit,
    QToolBar,
    QToolButton,
    QVBoxLayout,
    QWidget,
)

from pyrte.domain.errors import PyRteError
from pyrte.domain.interfaces import IExporterRegistry, ISettingsService
from pyrte.domain.models import SaveStatus
from pyrte.services.dashboard import DashboardService, format_relative, preview_text
from pyrte.services.ui.adapters.qt_rich_text_editor import QtRichTextEditor
from pyrte.services.ui.ports.messages import IMessageService
from pyrte.utils.constants import FONT_OPTIONS, HIGHLIGHT_COLORS, TEXT_COLORS

logger = logging.getLogger(__name__)

_STATUS_TEXT = {
    SaveStatus.SAVED: "Saved",
    SaveStatus.SAVING: "Saving...",
    SaveStatus.UNSAVED: "Unsaved",
}

# (command, label, shortcut, value)
_FORMAT_ACTIONS = [
    ("bold", "B", QKeySequence.StandardKey.Bold, None),
    ("italic", "i", QKeySequence.StandardKey.Italic, None),
    ("strike", "S", None, None),
    ("code", "`code`", None, None),
    ("heading", "H1", "Ctrl+Alt+1", 1),
    ("heading", "H2", "Ctrl+Alt+2", 2),
    ("heading", "H3", "Ctrl+Alt+3", 3),
    ("paragraph", "P", "Ctrl+Alt+0", None),
    ("bullet_list", "List", None, None),
    ("ordered_list", "1. List", None, None),
    ("blockquote", "Quote", None, None),
    ("code_block", "codeblock", None, None),
    ("horizontal_rule", "Rule", None, None),
]


class MainWindow(QMainWindow):
    """
    Dashboard on the left, editor page on the right. The window stays thin:
    document work goes through the attached DocumentPresenter, the list
    through DashboardService.
    """

    def __init__(
        self,
        dashboard: DashboardService,
        settings: ISettingsService,
        messages: IMessageService,
        exporters: IExporterRegistry,
        *,
        app_title: str = "PyRichTextEditor",
    ) -> None:
        super().__init__()
        self.setWindowTitle(app_title)
        self.resize(1200, 760)

        self.dashboard = dashboard
        self.settings = settings
        self.messages = messages
        self._exporters = exporters
        self.presenter = None

        # Editor page widgets
        self.editor_widget = QTextEdit(self)
        self.editor = QtRichTextEditor(self.editor_widget)
        self.title_edit = QLineEdit(self)
        self.title_edit.setPlaceholderText("Document title...")
        self.save_label = QLabel(_STATUS_TEXT[SaveStatus.SAVED], self)
        self.font_combo = QComboBox(self)
        self.font_combo.addItems(FONT_OPTIONS)

        # Dashboard widgets
        self.search_edit = QLineEdit(self)
        self.search_edit.setPlaceholderText("Search documents...")
        self.doc_list = QListWidget(self)
        self.new_btn = QPushButton("New Document", self)
        self.empty_label = QLabel("No documents yet", self)
        self.empty_label.setAlignment(Qt.AlignmentFlag.AlignCenter)

        self._build_actions()
        self._build_layout()
        self._build_toolbar()
        self._build_menu()
        self.setStatusBar(QStatusBar(self))
        if hasattr(self.messages, "attach_status_bar"):
            self.messages.attach_status_bar(self.statusBar())

        # Signals
        self.search_edit.textChanged.connect(lambda _t: self._populate_list())
        self.doc_list.itemActivated.connect(self._on_item_activated)
        self.doc_list.itemClicked.connect(self._on_item_activated)
        self.new_btn.clicked.connect(self._new_document)
        self.editor_widget.cursorPositionChanged.connect(self._sync_format_state)

        # Restore UI state
        geo = self.settings.get_geometry()
        if isinstance(geo, (bytes, bytearray)):
            self.restoreGeometry(QByteArray(geo))
        split = self.settings.get_splitter()
        if isinstance(split, (bytes, bytearray)):
            self.splitter.restoreState(QByteArray(split))

        self.set_editor_enabled(False)

    # ---------- UI creation ----------

    def _build_actions(self) -> None:
        self.exit_action = QAction("&Exit", self)
        self.exit_action.setShortcut("Ctrl+Q")
        self.exit_action.triggered.connect(self.close)

        self.act_new = QAction(
            "New Document", self, shortcut=QKeySequence.StandardKey.New, triggered=self._new_document
        )
        self.act_import = QAction("Import…", self, shortcut="Ctrl+I", triggered=self._import)
        self.act_delete = QAction("Delete Document", self, triggered=self._delete_document)
        self.act_refresh = QAction(
            "Refresh", self, shortcut=QKeySequence.StandardKey.Refresh, triggered=self.refresh
        )
        self.act_undo = QAction(
            "Undo",
            self,
            shortcut=QKeySequence.StandardKey.Undo,
            triggered=lambda: self.editor.apply("undo"),
        )
        self.act_redo = QAction(
            "Redo",
            self,
            shortcut=QKeySequence.StandardKey.Redo,
            triggered=lambda: self.editor.apply("redo"),
        )

        self.export_actions: list[QAction] = []
        for exporter in self._exporters.all():
            act = QAction(
                exporter.label,
                self,
                triggered=lambda chk=False, name=exporter.name: self._export(name),
            )
            self.export_actions.append(act)

        self.format_actions: list[tuple[str, object, QAction]] = []
        for command, label, shortcut, value in _FORMAT_ACTIONS:
            act = QAction(label, self)
            if shortcut is not None:
                act.setShortcut(shortcut)
            act.setCheckable(command not in ("horizontal_rule",))
            act.triggered.connect(lambda chk=False, c=command, v=value: self._format(c, v))
            self.format_actions.append((command, value, act))

        self.color_menu = self._color_menu("Text Color", "color", TEXT_COLORS)
        self.highlight_menu = self._color_menu("Highlight", "highlight", HIGHLIGHT_COLORS)

    def _color_menu(self, title: str, command: str, options: list[tuple[str, str]]) -> QMenu:
        menu = QMenu(title, self)
        for label, value in options:
            menu.addAction(
                QAction(
                    label,
                    self,
                    triggered=lambda chk=False, v=value: self._format(command, v),
                )
            )
        return menu

    def _build_layout(self) -> None:
        left = QWidget(self)
        lv = QVBoxLayout(left)
        lv.addWidget(QLabel("My Documents", left))
        lv.addWidget(self.search_edit)
        lv.addWidget(self.doc_list, 1)
        lv.addWidget(self.empty_label)
        lv.addWidget(self.new_btn)

        right = QWidget(self)
        rv = QVBoxLayout(right)
        header = QHBoxLayout()
        header.addWidget(self.title_edit, 1)
        header.addWidget(self.save_label)
        header.addWidget(QLabel("Font:", right))
        header.addWidget(self.font_combo)
        rv.addLayout(header)
        rv.addWidget(self.editor_widget, 1)

        self.splitter = QSplitter(self)
        self.splitter.setOrientation(Qt.Orientation.Horizontal)
        self.splitter.addWidget(left)
        self.splitter.addWidget(right)
        self.splitter.setStretchFactor(0, 0)
        self.splitter.setStretchFactor(1, 1)
        self.setCentralWidget(self.splitter)

    def _build_toolbar(self) -> None:
        tb = QToolBar("Main", self)
        tb.setMovable(False)
        for a in (self.act_new, self.act_import):
            tb.addAction(a)
        tb.addSeparator()
        for a in self.export_actions:
            tb.addAction(a)

        self.format_toolbar = QToolBar("Formatting", self)
        for a in (self.act_undo, self.act_redo):
            self.format_toolbar.addAction(a)
        self.format_toolbar.addSeparator()
        for _command, _value, a in self.format_actions:
            self.format_toolbar.addAction(a)
        self.format_toolbar.addSeparator()
        for menu in (self.color_menu, self.highlight_menu):
            btn = QToolButton(self)
            btn.setText(menu.title())
            btn.setMenu(menu)
            btn.setPopupMode(QToolButton.ToolButtonPopupMode.InstantPopup)
            self.format_toolbar.addWidget(btn)

        self.addToolBar(tb)
        self.addToolBarBreak()
        self.addToolBar(self.format_toolbar)

    def _build_menu(self) -> None:
        m = self.menuBar()
        filem = m.addMenu("&File")
        filem.addAction(self.act_new)
        filem.addAction(self.act_import)
        exportm = filem.addMenu("Export")
        for a in self.export_actions:
            exportm.addAction(a)
        filem.addSeparator()
        filem.addAction(self.act_refresh)
        filem.addAction(self.act_delete)
        filem.addSeparator()
        filem.addAction(self.exit_action)

        editm = m.addMenu("&Edit")
        editm.addAction(self.act_undo)
        editm.addAction(self.act_redo)

        formatm = m.addMenu("F&ormat")
        for _command, _value, a in self.format_actions:
            formatm.addAction(a)
        formatm.addSeparator()
        formatm.addMenu(self.color_menu)
        formatm.addMenu(self.highlight_menu)

    # ---------- wiring ----------

    def attach_presenter(self, presenter) -> None:
        self.presenter = presenter
        self.title_edit.textEdited.connect(presenter.on_title_changed)
        self.font_combo.activated.connect(
            lambda _i: presenter.on_font_changed(self.font_combo.currentText())
        )
        presenter.autosave.saved.connect(self._on_saved)

    def start(self) -> None:
        """Load the dashboard and reopen the last document, if it still exists."""
        self.refresh()
        last = self.settings.get_last_document()
        if last and any(d.id == last for d in self.dashboard.documents):
            self.open_document(last)

    # ---------- IDocumentView ----------

    def document_title(self) -> str:
        return self.title_edit.text()

    def set_document_title(self, title: str) -> None:
        self.title_edit.setText(title)

    def set_font_family(self, family: str) -> None:
        idx = self.font_combo.findText(family)
        if idx < 0:
            self.font_combo.addItem(family)
            idx = self.font_combo.count() - 1
        self.font_combo.setCurrentIndex(idx)

    def set_save_status(self, status: SaveStatus) -> None:
        self.save_label.setText(_STATUS_TEXT[status])

    def set_import_enabled(self, enabled: bool) -> None:
        self.act_import.setEnabled(enabled)
        if enabled:
            QApplication.restoreOverrideCursor()
        else:
            QApplication.setOverrideCursor(Qt.CursorShape.WaitCursor)

    def set_editor_enabled(self, enabled: bool) -> None:
        for w in (self.editor_widget, self.title_edit, self.font_combo, self.format_toolbar):
            w.setEnabled(enabled)
        for a in (self.act_import, self.act_delete, *self.export_actions):
            a.setEnabled(enabled)
        if not enabled:
            self.title_edit.clear()
            self.save_label.setText("")

    def show_status(self, text: str, msec: int = 3000) -> None:
        self.statusBar().showMessage(text, msec)

    # ---------- dashboard ----------

    def refresh(self) -> None:
        try:
            self.dashboard.refresh()
        except PyRteError as e:
            self.messages.error(self, e.title, str(e))
        self._populate_list()

    def _populate_list(self) -> None:
        current = self.presenter.current.id if self.presenter and self.presenter.current else None
        self.doc_list.blockSignals(True)
        self.doc_list.clear()
        docs = self.dashboard.filter(self.search_edit.text())
        for rec in docs:
            when = format_relative(rec.updated_at) if rec.updated_at else ""
            item = QListWidgetItem(f"{rec.title or 'Untitled'}\n{when}")
            item.setData(Qt.ItemDataRole.UserRole, rec.id)
            item.setToolTip(preview_text(rec.content))
            self.doc_list.addItem(item)
            if rec.id == current:
                item.setSelected(True)
        self.doc_list.blockSignals(False)

        if docs:
            self.empty_label.hide()
        else:
            searching = bool(self.search_edit.text())
            self.empty_label.setText("No documents found" if searching else "No documents yet")
            self.empty_label.show()

    def _on_item_activated(self, item: QListWidgetItem) -> None:
        doc_id = item.data(Qt.ItemDataRole.UserRole)
        if self.presenter and self.presenter.current and self.presenter.current.id == doc_id:
            return
        self.open_document(doc_id)

    def open_document(self, doc_id: str) -> None:
        if self.presenter is None:
            return
        try:
            rec = self.dashboard.repository.get_document(self.dashboard.user.id, doc_id)
        except PyRteError as e:
            self.messages.error(self, e.title, str(e))
            return
        if rec is None:
            self.messages.error(self, "Not found", "The document could not be found.")
            self.refresh()
            return
        self.presenter.open(rec)
        self.settings.set_last_document(rec.id)
        self.setWindowTitle(f"{rec.title} - PyRichTextEditor")

    def _new_document(self) -> None:
        try:
            rec = self.dashboard.create()
        except PyRteError as e:
            self.messages.error(self, e.title, str(e))
            return
        self._populate_list()
        self.open_document(rec.id)

    def _delete_document(self) -> None:
        if self.presenter is None:
            return
        if self.presenter.delete_current():
            self.settings.set_last_document(None)
            self.refresh()

    def _on_saved(self, record) -> None:
        self.dashboard.replace(record)
        self._populate_list()

    # ---------- editor actions ----------

    def _format(self, command: str, value: object | None = None) -> None:
        self.editor.apply(command, value)
        self.editor_widget.setFocus()
        self._sync_format_state()

    def _sync_format_state(self) -> None:
        level = self.editor.heading_level()
        for command, value, act in self.format_actions:
            if command == "heading":
                act.setChecked(level == value)
            elif command == "paragraph":
                act.setChecked(level == 0 and not self.editor.is_active("code_block"))
            elif act.isCheckable():
                act.setChecked(self.editor.is_active(command))

    def _import(self) -> None:
        if self.presenter is not None:
            self.presenter.import_via_dialog()

    def _export(self, name: str) -> None:
        if self.presenter is not None:
            self.presenter.export(name)

    # ---------- Close ----------

    def closeEvent(self, event):
        if self.presenter is not None:
            current = self.presenter.current
            self.settings.set_last_document(current.id if current else None)
            self.presenter.close()
        self.settings.set_geometry(bytes(self.saveGeometry()))
        self.settings.set_splitter(bytes(self.splitter.saveState()))
        super().closeEvent(event)
