"""Main application window for the MedTrack dashboard."""

from __future__ import annotations

import html
import logging
from datetime import datetime
from pathlib import Path
from typing import Callable, List, Optional

from PySide6.QtCore import QThread, QUrl, Qt
from PySide6.QtGui import QAction, QDesktopServices
from PySide6.QtWidgets import (
    QAbstractItemView,
    QComboBox,
    QFormLayout,
    QFrame,
    QHBoxLayout,
    QHeaderView,
    QLabel,
    QLineEdit,
    QMainWindow,
    QMessageBox,
    QPushButton,
    QStackedWidget,
    QTableWidget,
    QTableWidgetItem,
    QTabWidget,
    QTextBrowser,
    QVBoxLayout,
    QWidget,
)

from medtrack.domain.model import Bed, BedStatus, Department, UserRole
from medtrack.engine.controller import DashboardController, RuleViolation, ValidationError
from medtrack.engine.rules import StatusChange
from medtrack.fs.exports import exports_dir, sanitize_filename, safe_write_text
from medtrack.report.model import OccupancyReport
from medtrack.report.prompt import department_tally
from medtrack.report.requester import ReportRequester
from medtrack.report.txt_writer import render_report
from medtrack.workers.report_worker import ReportWorker

from .dialogs import ArchiveRecordDialog, DischargeDialog, PatientDialog

logger = logging.getLogger(__name__)

_PRIORITY_COLORS = {"High": "#b91c1c", "Medium": "#b45309", "Low": "#047857"}


class _Chip(QFrame):
    """Simple chip-style widget displaying a label and a value."""

    def __init__(self, title: str, parent: Optional[QWidget] = None) -> None:
        super().__init__(parent)
        self.setObjectName("Chip")
        self.setFrameShape(QFrame.Shape.StyledPanel)
        self.setFrameShadow(QFrame.Shadow.Raised)
        self.setStyleSheet(
            """
            QFrame#Chip {
                border-radius: 12px;
                background-color: #f2f2f7;
                padding: 6px 12px;
            }
            QFrame#Chip QLabel {
                color: #1c1c1e;
            }
            """
        )

        layout = QVBoxLayout(self)
        layout.setContentsMargins(8, 6, 8, 6)
        layout.setSpacing(2)

        self.title_label = QLabel(title)
        self.title_label.setStyleSheet("font-size: 12px; font-weight: 500; text-transform: uppercase;")
        self.value_label = QLabel("0")
        self.value_label.setStyleSheet("font-size: 18px; font-weight: 600;")

        layout.addWidget(self.title_label, alignment=Qt.AlignmentFlag.AlignLeft)
        layout.addWidget(self.value_label, alignment=Qt.AlignmentFlag.AlignLeft)

    def set_value(self, value: object) -> None:
        self.value_label.setText(str(value))


def _readonly_table(headers: List[str]) -> QTableWidget:
    table = QTableWidget(0, len(headers))
    table.setHorizontalHeaderLabels(headers)
    table.setEditTriggers(QAbstractItemView.EditTrigger.NoEditTriggers)
    table.setSelectionBehavior(QAbstractItemView.SelectionBehavior.SelectRows)
    table.setSelectionMode(QAbstractItemView.SelectionMode.SingleSelection)
    table.verticalHeader().setVisible(False)
    table.horizontalHeader().setSectionResizeMode(QHeaderView.ResizeMode.Stretch)
    return table


def _item(text: object, key: Optional[str] = None) -> QTableWidgetItem:
    item = QTableWidgetItem(str(text))
    if key is not None:
        item.setData(Qt.ItemDataRole.UserRole, key)
    return item


class MainWindow(QMainWindow):
    """Login page plus the tabbed dashboard for a signed-in user."""

    BED_HEADERS = ["Bed", "Department", "Status", "Patient", "Bill", "Daily Rate"]
    CHIP_KEYS = [
        ("Total Beds", "total"),
        ("Occupied", "occupied"),
        ("Available", "available"),
        ("Occupancy", "occupancy"),
        ("Session Revenue", "revenue"),
    ]

    def __init__(
        self,
        controller: DashboardController,
        requester: Optional[ReportRequester] = None,
        parent: Optional[QWidget] = None,
    ) -> None:
        super().__init__(parent)
        self.setWindowTitle("MedTrack — Bed Management")
        self.resize(1100, 720)

        self.controller = controller
        self._requester = requester
        self._report_loading = False
        self._report: Optional[OccupancyReport] = None
        self._threads: List[QThread] = []
        self._workers: List[ReportWorker] = []
        self._refreshing = False

        self._build_ui()
        self._create_actions()
        self.controller.add_listener(self.refresh)
        self._show_login()

    # --- UI assembly -----------------------------------------------------------------

    def _build_ui(self) -> None:
        self.stack = QStackedWidget(self)
        self.stack.addWidget(self._build_login_page())
        self.stack.addWidget(self._build_dashboard_page())
        self.setCentralWidget(self.stack)

    def _build_login_page(self) -> QWidget:
        page = QWidget()
        outer = QVBoxLayout(page)
        outer.addStretch(1)

        panel = QFrame()
        panel.setObjectName("LoginPanel")
        panel.setMaximumWidth(380)
        panel.setStyleSheet("QFrame#LoginPanel { border: 1px solid #d1d5db; border-radius: 16px; }")
        layout = QVBoxLayout(panel)
        layout.setContentsMargins(24, 24, 24, 24)
        title = QLabel("MedTrack Staff Portal")
        title.setStyleSheet("font-size: 20px; font-weight: 700;")
        layout.addWidget(title)

        form = QFormLayout()
        self.username_edit = QLineEdit()
        self.username_edit.setPlaceholderText("Username")
        self.password_edit = QLineEdit()
        self.password_edit.setPlaceholderText("Password")
        self.password_edit.setEchoMode(QLineEdit.EchoMode.Password)
        self.password_edit.returnPressed.connect(self._attempt_login)
        form.addRow("Username", self.username_edit)
        form.addRow("Password", self.password_edit)
        layout.addLayout(form)

        self.login_error_label = QLabel("")
        self.login_error_label.setStyleSheet("color: #b91c1c; font-weight: 500;")
        layout.addWidget(self.login_error_label)

        self.login_button = QPushButton("Sign In")
        self.login_button.clicked.connect(self._attempt_login)
        layout.addWidget(self.login_button)

        row = QHBoxLayout()
        row.addStretch(1)
        row.addWidget(panel)
        row.addStretch(1)
        outer.addLayout(row)
        outer.addStretch(2)
        return page

    def _build_dashboard_page(self) -> QWidget:
        page = QWidget()
        layout = QVBoxLayout(page)
        layout.setContentsMargins(18, 18, 18, 18)
        layout.setSpacing(12)

        self.user_label = QLabel("")
        self.user_label.setStyleSheet("font-size: 13px; color: #6B7280;")
        layout.addWidget(self.user_label)

        chips_row = QHBoxLayout()
        self._chips: dict[str, _Chip] = {}
        for title, key in self.CHIP_KEYS:
            chip = _Chip(title)
            chips_row.addWidget(chip)
            self._chips[key] = chip
        chips_row.addStretch(1)
        layout.addLayout(chips_row)

        self.tabs = QTabWidget()
        self.tabs.addTab(self._build_monitor_tab(), "Monitor")
        self.tabs.addTab(self._build_records_tab(), "Clinical Archive")
        self.tabs.addTab(self._build_reports_tab(), "AI Reports")
        self.users_tab = self._build_users_tab()
        self.tabs.addTab(self.users_tab, "Admin Control")
        layout.addWidget(self.tabs, stretch=1)
        return page

    def _build_monitor_tab(self) -> QWidget:
        tab = QWidget()
        layout = QVBoxLayout(tab)

        filter_row = QHBoxLayout()
        filter_row.addWidget(QLabel("Department:"))
        self.department_filter = QComboBox()
        self.department_filter.addItem("All", None)
        for department in Department:
            self.department_filter.addItem(department.value, department.value)
        self.department_filter.currentIndexChanged.connect(lambda _index: self.refresh())
        filter_row.addWidget(self.department_filter)
        filter_row.addStretch(1)
        self.edit_patient_button = QPushButton("Patient Details…")
        self.edit_patient_button.clicked.connect(self._edit_selected_bed)
        self.discharge_button = QPushButton("Discharge…")
        self.discharge_button.clicked.connect(self._discharge_selected_bed)
        filter_row.addWidget(self.edit_patient_button)
        filter_row.addWidget(self.discharge_button)
        layout.addLayout(filter_row)

        self.bed_table = _readonly_table(self.BED_HEADERS)
        self.bed_table.cellDoubleClicked.connect(lambda row, _col: self._edit_bed_at(row))
        layout.addWidget(self.bed_table, stretch=3)

        layout.addWidget(QLabel("Daily census (last 7 days)"))
        self.stats_table = _readonly_table(["Day", "Occupied", "Available", "Total", "Revenue"])
        layout.addWidget(self.stats_table, stretch=1)
        return tab

    def _build_records_tab(self) -> QWidget:
        tab = QWidget()
        layout = QVBoxLayout(tab)
        self.records_tabs = QTabWidget()
        self.active_table = _readonly_table(["Patient ID", "Name", "Diagnosis", "Bed", "Department", "Admitted"])
        self.archive_table = _readonly_table(
            ["Patient ID", "Name", "Diagnosis", "Discharged", "Stay (days)", "Final Bill"]
        )
        self.archive_table.cellDoubleClicked.connect(lambda row, _col: self._open_archive_row(row))
        self.records_tabs.addTab(self.active_table, "Active Cases")
        self.records_tabs.addTab(self.archive_table, "Archive")
        layout.addWidget(self.records_tabs)
        return tab

    def _build_reports_tab(self) -> QWidget:
        tab = QWidget()
        layout = QVBoxLayout(tab)
        row = QHBoxLayout()
        self.report_button = QPushButton("Generate Report")
        self.report_button.clicked.connect(self._start_report)
        self.save_report_button = QPushButton("Save TXT")
        self.save_report_button.setEnabled(False)
        self.save_report_button.clicked.connect(self._save_report_txt)
        row.addWidget(self.report_button)
        row.addWidget(self.save_report_button)
        row.addStretch(1)
        layout.addLayout(row)
        self.report_view = QTextBrowser()
        self.report_view.setPlaceholderText(
            "Analyze current hospital pressure and departmental flow based on live patient records."
        )
        layout.addWidget(self.report_view, stretch=1)
        return tab

    def _build_users_tab(self) -> QWidget:
        tab = QWidget()
        layout = QVBoxLayout(tab)

        form = QFormLayout()
        self.new_full_name_edit = QLineEdit()
        self.new_full_name_edit.setPlaceholderText("Medical Practitioner Name")
        self.new_username_edit = QLineEdit()
        self.new_username_edit.setPlaceholderText("username")
        self.new_password_edit = QLineEdit()
        self.new_password_edit.setEchoMode(QLineEdit.EchoMode.Password)
        self.new_role_combo = QComboBox()
        self.new_role_combo.addItem("Staff", UserRole.STAFF.value)
        self.new_role_combo.addItem("System Administrator", UserRole.ADMIN.value)
        form.addRow("Full name", self.new_full_name_edit)
        form.addRow("Username", self.new_username_edit)
        form.addRow("Password", self.new_password_edit)
        form.addRow("Role", self.new_role_combo)
        layout.addLayout(form)

        buttons = QHBoxLayout()
        self.add_user_button = QPushButton("Add Member")
        self.add_user_button.clicked.connect(self._add_user)
        self.remove_user_button = QPushButton("Remove Selected")
        self.remove_user_button.clicked.connect(self._remove_selected_user)
        buttons.addWidget(self.add_user_button)
        buttons.addWidget(self.remove_user_button)
        buttons.addStretch(1)
        layout.addLayout(buttons)

        self.users_table = _readonly_table(["Full Name", "Username", "Role"])
        layout.addWidget(self.users_table, stretch=1)
        return tab

    def _create_actions(self) -> None:
        toolbar = self.addToolBar("Actions")
        toolbar.setMovable(False)

        self.export_action = QAction("Export Registry", self)
        self.export_action.triggered.connect(self._export_registry)
        self.open_exports_action = QAction("Open Export Folder", self)
        self.open_exports_action.triggered.connect(self._open_export_folder)
        self.reset_action = QAction("Reset Database", self)
        self.reset_action.triggered.connect(self._reset_database)
        self.logout_action = QAction("Log Out", self)
        self.logout_action.triggered.connect(self._logout)

        toolbar.addAction(self.export_action)
        toolbar.addAction(self.open_exports_action)
        toolbar.addSeparator()
        toolbar.addAction(self.reset_action)
        toolbar.addSeparator()
        toolbar.addAction(self.logout_action)
        self._toolbar = toolbar

    # --- Session ----------------------------------------------------------------------

    def _show_login(self) -> None:
        self.stack.setCurrentIndex(0)
        self._toolbar.setVisible(False)
        self.password_edit.clear()

    def _attempt_login(self) -> None:
        user = self.controller.login(self.username_edit.text(), self.password_edit.text())
        if user is None:
            self.login_error_label.setText("Invalid credentials. Access Denied.")
            return
        self.login_error_label.setText("")
        self.password_edit.clear()
        self.stack.setCurrentIndex(1)
        self._toolbar.setVisible(True)
        self.tabs.setCurrentIndex(0)
        self.refresh()

    def _logout(self) -> None:
        self.controller.logout()
        self._show_login()

    # --- Rendering --------------------------------------------------------------------

    def refresh(self) -> None:
        """Redraw every view from the controller state."""

        self._refreshing = True
        try:
            self._refresh_header()
            self._refresh_beds()
            self._refresh_stats()
            self._refresh_records()
            self._refresh_users()
        finally:
            self._refreshing = False

    def _refresh_header(self) -> None:
        user = self.controller.current_user
        is_admin = bool(user and user.is_admin)
        self.user_label.setText(f"Signed in as {user.full_name} ({user.role.value})" if user else "")
        self.tabs.setTabVisible(self.tabs.indexOf(self.users_tab), is_admin)
        self.reset_action.setEnabled(is_admin)

        snapshot = self.controller.stats()
        self._chips["total"].set_value(snapshot.total)
        self._chips["occupied"].set_value(snapshot.occupied)
        self._chips["available"].set_value(snapshot.available)
        self._chips["occupancy"].set_value(f"{snapshot.occupancy_rate}%")
        self._chips["revenue"].set_value(f"{self.controller.state.session_revenue:,.2f}")

    def _refresh_beds(self) -> None:
        selected = self.department_filter.currentData()
        beds = self.controller.beds_in(Department(selected) if selected else None)
        self.bed_table.setRowCount(len(beds))
        for row, bed in enumerate(beds):
            self.bed_table.setItem(row, 0, _item(bed.number, bed.id))
            self.bed_table.setItem(row, 1, _item(bed.department.value))
            self.bed_table.setCellWidget(row, 2, self._status_combo(bed))
            self.bed_table.setItem(row, 3, _item(bed.patient.name if bed.patient else "—"))
            bill = f"{bed.patient.current_bill:,.2f}" if bed.patient else "—"
            self.bed_table.setItem(row, 4, _item(bill))
            self.bed_table.setItem(row, 5, _item(f"{bed.daily_rate:,.2f}"))

    def _status_combo(self, bed: Bed) -> QComboBox:
        combo = QComboBox()
        for status in BedStatus:
            combo.addItem(status.value, status.value)
        combo.setCurrentIndex(list(BedStatus).index(bed.status))
        combo.currentIndexChanged.connect(
            lambda _index, bed_id=bed.id, widget=combo: self._on_status_requested(bed_id, widget.currentData())
        )
        return combo

    def _refresh_stats(self) -> None:
        history = self.controller.state.stats_history
        self.stats_table.setRowCount(len(history))
        for row, entry in enumerate(history):
            self.stats_table.setItem(row, 0, _item(entry.label, entry.day))
            self.stats_table.setItem(row, 1, _item(entry.occupied))
            self.stats_table.setItem(row, 2, _item(entry.available))
            self.stats_table.setItem(row, 3, _item(entry.total))
            self.stats_table.setItem(row, 4, _item(f"{entry.revenue:,.2f}"))

    def _refresh_records(self) -> None:
        active = self.controller.active_patients()
        self.active_table.setRowCount(len(active))
        for row, entry in enumerate(active):
            self.active_table.setItem(row, 0, _item(entry.patient.id, entry.bed_id))
            self.active_table.setItem(row, 1, _item(entry.patient.name))
            self.active_table.setItem(row, 2, _item(entry.patient.diagnosis))
            self.active_table.setItem(row, 3, _item(entry.bed_number))
            self.active_table.setItem(row, 4, _item(entry.department.value))
            self.active_table.setItem(row, 5, _item(entry.patient.admission_date))

        archive = self.controller.state.discharge_history
        self.archive_table.setRowCount(len(archive))
        for row, record in enumerate(archive):
            self.archive_table.setItem(row, 0, _item(record.id, record.id))
            self.archive_table.setItem(row, 1, _item(record.name))
            self.archive_table.setItem(row, 2, _item(record.diagnosis))
            self.archive_table.setItem(row, 3, _item(record.discharge_date))
            self.archive_table.setItem(row, 4, _item(record.stay_duration))
            self.archive_table.setItem(row, 5, _item(f"{record.final_bill:,.2f}"))

    def _refresh_users(self) -> None:
        users = self.controller.state.users
        self.users_table.setRowCount(len(users))
        for row, user in enumerate(users):
            self.users_table.setItem(row, 0, _item(user.full_name, user.id))
            self.users_table.setItem(row, 1, _item(user.username))
            self.users_table.setItem(row, 2, _item(user.role.value))

    # --- Bed actions ------------------------------------------------------------------

    def _selected_key(self, table: QTableWidget) -> Optional[str]:
        row = table.currentRow()
        if row < 0 or table.item(row, 0) is None:
            return None
        return table.item(row, 0).data(Qt.ItemDataRole.UserRole)

    def _on_status_requested(self, bed_id: str, status: BedStatus | str) -> None:
        if self._refreshing or status is None:
            return
        outcome = self.controller.request_status_change(bed_id, BedStatus(status))
        if outcome is StatusChange.REQUIRES_ADMISSION:
            self._open_patient_dialog(bed_id)
        elif outcome is StatusChange.REQUIRES_DISCHARGE:
            self._open_discharge_dialog(bed_id)
        # Resync the combo when the change was deferred or cancelled.
        self.refresh()

    def _edit_bed_at(self, row: int) -> None:
        item = self.bed_table.item(row, 0)
        if item is not None:
            self._open_patient_dialog(item.data(Qt.ItemDataRole.UserRole))

    def _edit_selected_bed(self) -> None:
        bed_id = self._selected_key(self.bed_table)
        if bed_id is None:
            QMessageBox.information(self, "No Bed Selected", "Select a bed first.")
            return
        self._open_patient_dialog(bed_id)

    def _discharge_selected_bed(self) -> None:
        bed_id = self._selected_key(self.bed_table)
        if bed_id is None:
            QMessageBox.information(self, "No Bed Selected", "Select a bed first.")
            return
        if self.controller.bed(bed_id).patient is None:
            QMessageBox.information(self, "Nothing to Discharge", "This bed has no patient.")
            return
        self._open_discharge_dialog(bed_id)

    def _open_patient_dialog(self, bed_id: str) -> None:
        dialog = PatientDialog(self.controller.bed(bed_id), self)
        if dialog.exec() != PatientDialog.DialogCode.Accepted:
            return
        self._run_guarded(lambda: self.controller.save_patient(bed_id, dialog.form()))

    def _open_discharge_dialog(self, bed_id: str) -> None:
        dialog = DischargeDialog(self.controller.bed(bed_id), self)
        if dialog.exec() != DischargeDialog.DialogCode.Accepted:
            return
        self._run_guarded(lambda: self.controller.finalize_discharge(bed_id, dialog.form()))

    def _open_archive_row(self, row: int) -> None:
        item = self.archive_table.item(row, 0)
        if item is None:
            return
        record = self.controller.find_archive_record(item.data(Qt.ItemDataRole.UserRole))
        if record is not None:
            ArchiveRecordDialog(record, self).exec()

    def _run_guarded(self, operation: Callable[[], object]) -> bool:
        try:
            operation()
        except ValidationError as exc:
            QMessageBox.warning(self, "Invalid Input", str(exc))
            return False
        except RuleViolation as exc:
            QMessageBox.warning(self, "Not Allowed", str(exc))
            return False
        return True

    # --- Users ------------------------------------------------------------------------

    def _add_user(self) -> None:
        added = self._run_guarded(
            lambda: self.controller.add_user(
                self.new_username_edit.text(),
                self.new_password_edit.text(),
                self.new_full_name_edit.text(),
                UserRole(self.new_role_combo.currentData()),
            )
        )
        if added:
            self.new_username_edit.clear()
            self.new_password_edit.clear()
            self.new_full_name_edit.clear()
            self.new_role_combo.setCurrentIndex(0)
            QMessageBox.information(self, "Personnel", "New member added successfully.")

    def _remove_selected_user(self) -> None:
        user_id = self._selected_key(self.users_table)
        if user_id is None:
            return
        self._run_guarded(lambda: self.controller.remove_user(user_id, self._confirm_user_removal))

    def _confirm_user_removal(self, user) -> bool:
        answer = QMessageBox.question(self, "Remove User", f"Remove {user.full_name} ({user.username})?")
        return answer == QMessageBox.StandardButton.Yes

    # --- Reports ----------------------------------------------------------------------

    def _set_report_loading(self, loading: bool) -> None:
        self._report_loading = loading
        self.report_button.setEnabled(not loading)
        self.report_button.setText("Analyzing…" if loading else "Generate Report")

    def _start_report(self) -> None:
        if self._report_loading:
            return
        self._set_report_loading(True)
        thread = QThread(self)
        worker = ReportWorker(self.controller.state.beds, self._requester)
        worker.moveToThread(thread)
        thread.started.connect(worker.run)
        worker.succeeded.connect(self._on_report_ready)
        worker.failed.connect(self._on_report_failed)
        worker.finished.connect(thread.quit)
        thread.finished.connect(lambda: self._forget_thread(thread, worker))
        self._threads.append(thread)
        self._workers.append(worker)
        thread.start()

    def _forget_thread(self, thread: QThread, worker: ReportWorker) -> None:
        if thread in self._threads:
            self._threads.remove(thread)
        if worker in self._workers:
            self._workers.remove(worker)
        worker.deleteLater()
        thread.deleteLater()

    def _on_report_ready(self, report: OccupancyReport) -> None:
        self._report = report
        self._set_report_loading(False)
        self.save_report_button.setEnabled(True)
        self.report_view.setHtml(self._report_html(report))

    def _on_report_failed(self, message: str) -> None:
        self._set_report_loading(False)
        QMessageBox.warning(self, "Report", message)

    @staticmethod
    def _report_html(report: OccupancyReport) -> str:
        parts = [f"<h2>{html.escape(report.title)}</h2>", f"<p>{html.escape(report.summary)}</p>"]
        for insight in report.insights:
            color = _PRIORITY_COLORS.get(insight.priority, "#374151")
            parts.append(
                f"<h3>{html.escape(insight.title)} <span style='color:{color}'>[{insight.priority}]</span></h3>"
                f"<p>{html.escape(insight.content)}</p>"
                f"<p><b>Recommendation:</b> {html.escape(insight.recommendation)}</p>"
            )
        return "\n".join(parts)

    def _save_report_txt(self) -> None:
        if self._report is None:
            QMessageBox.warning(self, "Nothing to Save", "Generate a report before saving.")
            return
        name = sanitize_filename(f"occupancy_report_{datetime.now():%Y%m%d_%H%M%S}.txt")
        text = render_report(self._report, department_tally(self.controller.state.beds))
        written = safe_write_text(exports_dir() / name, text)
        QMessageBox.information(self, "Report Saved", f"Saved to {written}")

    # --- Registry ---------------------------------------------------------------------

    def _export_registry(self) -> None:
        try:
            path = self.controller.export_registry()
        except OSError as exc:
            QMessageBox.warning(self, "Export Error", f"Unable to export registry: {exc}")
            return
        QMessageBox.information(self, "Registry Exported", f"Saved to {path}")

    def _open_export_folder(self) -> None:
        target: Path = exports_dir()
        QDesktopServices.openUrl(QUrl.fromLocalFile(str(target)))

    def _reset_database(self) -> None:
        answer = QMessageBox.question(
            self,
            "Reset Database",
            "This will permanently wipe ALL patients and archives. Continue?",
        )
        if answer != QMessageBox.StandardButton.Yes:
            return
        self.controller.reset()
        logger.info("Database reset from UI")
        if self.controller.current_user is None:
            self._show_login()

    def closeEvent(self, event) -> None:  # noqa: N802
        for thread in list(self._threads):
            try:
                if thread.isRunning():
                    thread.quit()
                    thread.wait(1000)
            except RuntimeError:
                pass
        super().closeEvent(event)


__all__ = ["MainWindow"]
