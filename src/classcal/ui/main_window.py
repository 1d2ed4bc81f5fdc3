"""Main application window for ClassCal.

A single form: institution, class name, optional location, a pasted list
of dates and one checkbox per period. Generate compiles the schedule and
asks where to save the resulting .ics file.
"""

import logging
from datetime import datetime
from typing import Callable, Dict, List, Optional

import pytz
from PyQt6.QtWidgets import (
    QCheckBox, QComboBox, QFileDialog, QFormLayout, QHBoxLayout, QLabel,
    QLineEdit, QMainWindow, QMessageBox, QPlainTextEdit, QPushButton,
    QVBoxLayout, QWidget
)

from classcal.config.constants import (
    STATUS_CANCELLED,
    STATUS_CONFIG_FAILED,
    STATUS_READY,
    STATUS_SAVED,
)
from classcal.config.settings import CALENDAR_CONFIG, UI_CONFIG, CalendarConfig
from classcal.core.ics_builder import CalendarDocument, compile_schedule
from classcal.core.registry import Institution, PeriodRegistry, period_label
from classcal.core.schedule_model import ScheduleRequest
from classcal.exceptions.errors import ConfigLoadError, ScheduleValidationError
from classcal.storage.document_writer import write_document
from classcal.ui.error_messages import get_user_friendly_error

logger = logging.getLogger(__name__)

STATUS_COLORS = {
    "info": "#555555",
    "success": "#1e7e34",
    "warning": "#b8860b",
    "error": "#c82333",
}


def _utc_now() -> datetime:
    return datetime.now(pytz.utc)


class ScheduleWindow(QMainWindow):
    """Form that turns class dates and periods into an .ics file."""

    def __init__(
        self,
        registry: Optional[PeriodRegistry] = None,
        config: CalendarConfig = CALENDAR_CONFIG,
        load_error: Optional[ConfigLoadError] = None,
        clock: Callable[[], datetime] = _utc_now,
    ):
        """Initialize the main window.

        Args:
            registry: Loaded period registry, or None if loading failed.
            config: Calendar settings passed through to the compiler.
            load_error: The configuration error to report, if any.
            clock: Source of the creation instant stamped on events.
        """
        super().__init__()

        self.registry = registry
        self.config = config
        self._clock = clock
        self.period_checkboxes: Dict[str, QCheckBox] = {}

        self._init_window_properties()
        self._init_ui()
        self._connect_signals()

        if registry is None:
            self._disable_generation(load_error)
        else:
            self._populate_institutions()
            self._set_status(STATUS_READY, "info")

    def _init_window_properties(self) -> None:
        """Set window title and size."""
        self.setWindowTitle(UI_CONFIG.window_title)
        self.setMinimumSize(*UI_CONFIG.min_window_size)
        self.resize(*UI_CONFIG.default_window_size)

    def _init_ui(self) -> None:
        """Build the form."""
        container = QWidget(self)
        layout = QVBoxLayout(container)

        form = QFormLayout()
        self.institution_combo = QComboBox()
        self.institution_label = QLabel("Institution")
        form.addRow(self.institution_label, self.institution_combo)

        self.class_input = QLineEdit()
        self.class_input.setPlaceholderText("e.g. Algorithms")
        form.addRow("Class name", self.class_input)

        self.location_input = QLineEdit()
        self.location_input.setPlaceholderText("Optional, defaults to the campus address")
        form.addRow("Location", self.location_input)

        self.dates_input = QPlainTextEdit()
        self.dates_input.setPlaceholderText(UI_CONFIG.dates_placeholder)
        form.addRow("Dates (one per line)", self.dates_input)

        self.periods_container = QWidget()
        self.periods_layout = QHBoxLayout(self.periods_container)
        self.periods_layout.setContentsMargins(0, 0, 0, 0)
        form.addRow("Periods", self.periods_container)

        layout.addLayout(form)

        self.generate_button = QPushButton("Generate calendar file")
        layout.addWidget(self.generate_button)

        self.status_label = QLabel()
        self.status_label.setWordWrap(True)
        layout.addWidget(self.status_label)

        self.setCentralWidget(container)

    def _connect_signals(self) -> None:
        self.institution_combo.currentIndexChanged.connect(self._on_institution_changed)
        self.generate_button.clicked.connect(self.generate)

    # --- State ---

    def _populate_institutions(self) -> None:
        """Fill the institution selector, or hide it for a single table."""
        if not self.registry.is_institution_scoped:
            self.institution_label.hide()
            self.institution_combo.hide()
            self._rebuild_period_checkboxes(self.registry.select(None))
            return

        self.institution_combo.blockSignals(True)
        self.institution_combo.addItem("Select an institution", None)
        for institution in self.registry.institutions():
            self.institution_combo.addItem(institution.name, institution.key)
        self.institution_combo.blockSignals(False)
        self._rebuild_period_checkboxes(None)

    def _on_institution_changed(self, _index: int) -> None:
        key = self.selected_institution_key()
        institution = self.registry.select(key) if self.registry and key else None
        self._rebuild_period_checkboxes(institution)

    def _rebuild_period_checkboxes(self, institution: Optional[Institution]) -> None:
        """Replace the period checkboxes with those of the given institution."""
        while self.periods_layout.count():
            item = self.periods_layout.takeAt(0)
            widget = item.widget()
            if widget is not None:
                widget.deleteLater()
        self.period_checkboxes = {}

        if institution is None:
            self.periods_layout.addWidget(QLabel("Select an institution first"))
            return

        for period_id, times in institution.periods.items():
            checkbox = QCheckBox(f"{period_label(period_id)} ({times.label})")
            self.period_checkboxes[period_id] = checkbox
            self.periods_layout.addWidget(checkbox)
        self.periods_layout.addStretch(1)

    def _disable_generation(self, error: Optional[ConfigLoadError]) -> None:
        self.generate_button.setEnabled(False)
        message = get_user_friendly_error(error) if error else STATUS_CONFIG_FAILED.format(
            error="no configuration"
        )
        self._set_status(message, "error")

    def _set_status(self, message: str, level: str) -> None:
        self.status_label.setText(message)
        self.status_label.setStyleSheet(f"color: {STATUS_COLORS[level]};")

    # --- Form values ---

    def selected_institution_key(self) -> Optional[str]:
        if self.registry is None or not self.registry.is_institution_scoped:
            return None
        return self.institution_combo.currentData()

    def selected_periods(self) -> List[str]:
        """Checked period ids in table order."""
        return [pid for pid, box in self.period_checkboxes.items() if box.isChecked()]

    def collect_request(self) -> ScheduleRequest:
        return ScheduleRequest.from_form(
            class_label=self.class_input.text(),
            dates_text=self.dates_input.toPlainText(),
            selected_periods=self.selected_periods(),
            location_override=self.location_input.text(),
            institution_key=self.selected_institution_key(),
        )

    # --- Generation ---

    def build_document(self) -> CalendarDocument:
        """Compile the current form values.

        Raises:
            ScheduleValidationError: If the form is incomplete or nothing
                could be expanded.
        """
        return compile_schedule(self.collect_request(), self.registry, self._clock(), self.config)

    def generate(self) -> None:
        """Compile the form and save the result where the user chooses."""
        if self.registry is None:
            return

        try:
            document = self.build_document()
        except ScheduleValidationError as e:
            logger.info("Schedule rejected: %s", e)
            level = "warning" if e.kind == "EmptyResult" else "error"
            self._set_status(get_user_friendly_error(e), level)
            return

        path, _ = QFileDialog.getSaveFileName(
            self, "Save calendar file", document.filename, "iCalendar files (*.ics)"
        )
        if not path:
            self._set_status(STATUS_CANCELLED, "info")
            return

        try:
            written = write_document(document, path)
        except OSError as e:
            logger.error("Failed to save calendar file: %s", e)
            QMessageBox.critical(self, "Error", f"Failed to save calendar file: {e}")
            return

        self._set_status(STATUS_SAVED.format(count=document.event_count, path=written), "success")
