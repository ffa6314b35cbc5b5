"""Modal forms for admission, discharge and archive details."""

from __future__ import annotations

from typing import Optional

from PySide6.QtCore import QDate, Qt
from PySide6.QtWidgets import (
    QDateEdit,
    QDialog,
    QDialogButtonBox,
    QFormLayout,
    QLabel,
    QLineEdit,
    QMessageBox,
    QPlainTextEdit,
    QVBoxLayout,
    QWidget,
)

from medtrack.dates import parse_iso_date, today
from medtrack.domain.model import Bed, DischargedPatient
from medtrack.engine.controller import DischargeForm, PatientForm

DEFAULT_DISCHARGE_SUMMARY = "Condition stable. Advised follow-up in 7 days."


def _qdate(value: str) -> QDate:
    try:
        parsed = parse_iso_date(value)
    except ValueError:
        parsed = today()
    return QDate(parsed.year, parsed.month, parsed.day)


def _format_amount(value: float) -> str:
    return f"{value:g}" if value == int(value) else f"{value:.2f}"


class PatientDialog(QDialog):
    """Admission form for an empty bed, or the edit form for its patient."""

    def __init__(self, bed: Bed, parent: Optional[QWidget] = None) -> None:
        super().__init__(parent)
        self._bed = bed
        patient = bed.patient
        self.setWindowTitle(f"{'Update Patient' if patient else 'Admit Patient'} — {bed.number}")
        self.setMinimumWidth(420)

        layout = QVBoxLayout(self)
        form = QFormLayout()

        self.name_edit = QLineEdit(patient.name if patient else "")
        self.name_edit.setPlaceholderText("Identity of patient")
        self.diagnosis_edit = QLineEdit(patient.diagnosis if patient else "")
        self.diagnosis_edit.setPlaceholderText("Primary reason")
        self.medications_edit = QPlainTextEdit(", ".join(patient.medications) if patient else "")
        self.medications_edit.setPlaceholderText("Medications (comma-separated)")
        self.medications_edit.setFixedHeight(72)
        self.patient_id_edit = QLineEdit(patient.id if patient else "")
        self.patient_id_edit.setPlaceholderText("Auto-generated")
        self.patient_id_edit.setReadOnly(patient is not None)
        self.admission_edit = QDateEdit(_qdate(patient.admission_date if patient else ""))
        self.admission_edit.setCalendarPopup(True)
        self.admission_edit.setDisplayFormat("yyyy-MM-dd")
        default_bill = patient.current_bill if patient else bed.daily_rate
        self.bill_edit = QLineEdit(_format_amount(default_bill))
        self.bill_edit.setPlaceholderText("Financials")

        form.addRow("Patient name", self.name_edit)
        form.addRow("Diagnosis", self.diagnosis_edit)
        form.addRow("Medications", self.medications_edit)
        form.addRow("Patient ID", self.patient_id_edit)
        form.addRow("Admission date", self.admission_edit)
        form.addRow("Current bill", self.bill_edit)
        layout.addLayout(form)

        buttons = QDialogButtonBox(QDialogButtonBox.StandardButton.Save | QDialogButtonBox.StandardButton.Cancel)
        buttons.accepted.connect(self._on_accept)
        buttons.rejected.connect(self.reject)
        layout.addWidget(buttons)

    def form(self) -> PatientForm:
        return PatientForm(
            name=self.name_edit.text(),
            diagnosis=self.diagnosis_edit.text(),
            medications=self.medications_edit.toPlainText(),
            patient_id=self.patient_id_edit.text(),
            admission_date=self.admission_edit.date().toString("yyyy-MM-dd"),
            current_bill=self.bill_edit.text(),
        )

    def _on_accept(self) -> None:
        if not self.name_edit.text().strip() or not self.diagnosis_edit.text().strip():
            QMessageBox.warning(self, "Missing Fields", "Patient name and diagnosis are required.")
            return
        self.accept()


class DischargeDialog(QDialog):
    """Discharge date, final bill and summary for an occupied bed."""

    def __init__(self, bed: Bed, parent: Optional[QWidget] = None) -> None:
        super().__init__(parent)
        patient = bed.patient
        self.setWindowTitle(f"Discharge — {bed.number}")
        self.setMinimumWidth(420)

        layout = QVBoxLayout(self)
        heading = QLabel(f"{patient.name} ({patient.id})" if patient else bed.number)
        heading.setStyleSheet("font-size: 15px; font-weight: 600;")
        layout.addWidget(heading)

        form = QFormLayout()
        self.date_edit = QDateEdit(_qdate(""))
        self.date_edit.setCalendarPopup(True)
        self.date_edit.setDisplayFormat("yyyy-MM-dd")
        self.bill_edit = QLineEdit(_format_amount(patient.current_bill) if patient else "")
        self.summary_edit = QPlainTextEdit(DEFAULT_DISCHARGE_SUMMARY)
        self.summary_edit.setFixedHeight(96)
        form.addRow("Discharge date", self.date_edit)
        form.addRow("Final bill", self.bill_edit)
        form.addRow("Summary", self.summary_edit)
        layout.addLayout(form)

        buttons = QDialogButtonBox(QDialogButtonBox.StandardButton.Ok | QDialogButtonBox.StandardButton.Cancel)
        buttons.button(QDialogButtonBox.StandardButton.Ok).setText("Finalize Discharge")
        buttons.accepted.connect(self._on_accept)
        buttons.rejected.connect(self.reject)
        layout.addWidget(buttons)

    def form(self) -> DischargeForm:
        return DischargeForm(
            discharge_date=self.date_edit.date().toString("yyyy-MM-dd"),
            final_bill=self.bill_edit.text(),
            summary=self.summary_edit.toPlainText(),
        )

    def _on_accept(self) -> None:
        if not self.summary_edit.toPlainText().strip():
            QMessageBox.warning(self, "Missing Summary", "Provide a summary for the medical record.")
            return
        self.accept()


class ArchiveRecordDialog(QDialog):
    """Read-only view of a discharged patient's record."""

    def __init__(self, record: DischargedPatient, parent: Optional[QWidget] = None) -> None:
        super().__init__(parent)
        self.setWindowTitle(f"Archive — {record.name}")
        self.setMinimumWidth(440)
        layout = QVBoxLayout(self)

        form = QFormLayout()
        form.addRow("Patient ID", QLabel(record.id))
        form.addRow("Diagnosis", QLabel(record.diagnosis))
        form.addRow("Medications", QLabel(", ".join(record.medications) or "—"))
        form.addRow("Admitted", QLabel(record.admission_date))
        form.addRow("Discharged", QLabel(record.discharge_date))
        form.addRow("Stay", QLabel(f"{record.stay_duration} day(s)"))
        form.addRow("Final bill", QLabel(f"{record.final_bill:,.2f}"))
        layout.addLayout(form)

        summary = QLabel(record.discharge_summary)
        summary.setWordWrap(True)
        summary.setTextInteractionFlags(Qt.TextInteractionFlag.TextSelectableByMouse)
        layout.addWidget(summary)

        buttons = QDialogButtonBox(QDialogButtonBox.StandardButton.Close)
        buttons.rejected.connect(self.reject)
        layout.addWidget(buttons)


__all__ = ["PatientDialog", "DischargeDialog", "ArchiveRecordDialog", "DEFAULT_DISCHARGE_SUMMARY"]
