"""Main GUI window for the premium proration calculator."""

from __future__ import annotations

from pathlib import Path

from PySide6.QtCore import QThreadPool, Qt
from PySide6.QtWidgets import (
    QCheckBox,
    QFileDialog,
    QFormLayout,
    QHBoxLayout,
    QLabel,
    QLineEdit,
    QMainWindow,
    QMessageBox,
    QPlainTextEdit,
    QPushButton,
    QScrollArea,
    QTableWidget,
    QTableWidgetItem,
    QTabWidget,
    QTextEdit,
    QVBoxLayout,
    QWidget,
)

from prorate_app.core.config import AppConfig
from prorate_app.models.coverage import CoverageLine
from prorate_app.models.policy import CalculationResult, PolicyInputs
from prorate_app.services.calculator_service import ProrationService
from prorate_app.services.csv_import_service import COVERAGE_CSV_HEADERS, CsvImportService
from prorate_app.services.form_helpers import (
    apply_dates_to_all,
    auto_expiration,
    format_dollar,
    format_field,
    format_percent,
)
from prorate_app.services.quote_renderer import line_cells, render_quote_html
from prorate_app.ui.tasks import ImportCoverageCsvTask

INPUT_LABELS = [
    "Coverage",
    "Premium",
    "TIV",
    "Rate %",
    "Carrier Tax %",
    "Carrier Fee",
    "Commission %",
    "Effective",
    "Expiration",
    "Endorsement",
    "Down %",
    "Down $",
]

RESULT_LABELS = [
    "Coverage",
    "Premium",
    "Prorated",
    "Tax",
    "Carrier Fee",
    "Total",
    "Commission",
    "Broker Fee",
]

DEFAULT_COVERAGES = ["Auto Liability", "General Liability", "Property", "Umbrella"]

EFFECTIVE_COLUMN = COVERAGE_CSV_HEADERS.index("effective_date")
EXPIRATION_COLUMN = COVERAGE_CSV_HEADERS.index("expiration_date")


class MainWindow(QMainWindow):
    """GUI for entering coverage lines and reviewing the prorated quote."""

    def __init__(
        self,
        config: AppConfig,
        proration_service: ProrationService,
        csv_import_service: CsvImportService,
    ):
        super().__init__()
        self.config = config
        self.proration_service = proration_service
        self.csv_import_service = csv_import_service
        self.thread_pool = QThreadPool.globalInstance()
        self._last_result: CalculationResult | None = None

        self.setWindowTitle("Premium Proration Calculator")
        self.resize(1400, 900)

        self.tabs = QTabWidget()
        self._build_calculator_tab()
        self._build_quote_tab()
        self._build_help_tab()
        self._build_exit_tab()
        self.setCentralWidget(self.tabs)

    def _build_calculator_tab(self) -> None:
        tab = QWidget()
        layout = QVBoxLayout(tab)

        self.lines_table = QTableWidget(0, len(INPUT_LABELS))
        self.lines_table.setHorizontalHeaderLabels(INPUT_LABELS)
        for name in DEFAULT_COVERAGES:
            self._append_line_row(CoverageLine(name=name))
        self.lines_table.cellChanged.connect(self._on_line_cell_changed)

        row_buttons = QHBoxLayout()
        add_button = QPushButton("Add line")
        add_button.clicked.connect(lambda: self._append_line_row(CoverageLine(name="")))
        remove_button = QPushButton("Remove line")
        remove_button.clicked.connect(self.remove_selected_line)
        import_button = QPushButton("Import CSV")
        import_button.clicked.connect(self.import_lines_from_csv)
        row_buttons.addWidget(add_button)
        row_buttons.addWidget(remove_button)
        row_buttons.addWidget(import_button)
        for date_type in ("effective", "expiration", "endorsement"):
            button = QPushButton(f"Apply {date_type} to all")
            button.clicked.connect(lambda _checked=False, kind=date_type: self.apply_date_to_all(kind))
            row_buttons.addWidget(button)

        form = QFormLayout()
        self.broker_fee_input = QLineEdit()
        self.financed_broker_fee_input = QLineEdit()
        self.down_payment_input = QLineEdit()
        self.down_payment_input.setPlaceholderText(
            f"blank = {self.config.down_payment.default_pct}%"
        )
        self.apr_input = QLineEdit()
        self.payments_input = QLineEdit()
        self.payments_input.setText(str(self.config.payments.default_payments))
        self.payment_status_input = QCheckBox("Payment status confirmed")
        self.payment_status_input.setChecked(True)

        for widget in [
            self.broker_fee_input,
            self.financed_broker_fee_input,
            self.down_payment_input,
            self.apr_input,
            self.payments_input,
        ]:
            widget.returnPressed.connect(self.calculate)

        form.addRow("Total broker fee", self.broker_fee_input)
        form.addRow("Financed broker fee", self.financed_broker_fee_input)
        form.addRow("Down payment %", self.down_payment_input)
        form.addRow("APR %", self.apr_input)
        payments = self.config.payments
        form.addRow(f"Payments ({payments.min_payments}-{payments.max_payments})", self.payments_input)
        form.addRow("", self.payment_status_input)

        calculate_button = QPushButton("Calculate")
        calculate_button.clicked.connect(self.calculate)

        self.results_table = QTableWidget(0, len(RESULT_LABELS))
        self.results_table.setHorizontalHeaderLabels(RESULT_LABELS)

        self.summary_label = QLabel()
        self.summary_label.setTextFormat(Qt.TextFormat.RichText)
        self.notices_view = QPlainTextEdit()
        self.notices_view.setReadOnly(True)
        self.notices_view.setMaximumHeight(120)

        layout.addWidget(QLabel("Coverage lines"))
        layout.addWidget(self.lines_table)
        layout.addLayout(row_buttons)
        layout.addLayout(form)
        layout.addWidget(calculate_button)
        layout.addWidget(QLabel("Prorated results"))
        layout.addWidget(self.results_table)
        layout.addWidget(self.summary_label)
        layout.addWidget(self.notices_view)

        self.tabs.addTab(tab, "Calculator")

    def _build_quote_tab(self) -> None:
        tab = QWidget()
        layout = QVBoxLayout(tab)
        self.quote_view = QTextEdit()
        self.quote_view.setReadOnly(True)
        save_button = QPushButton("Save quote as HTML")
        save_button.clicked.connect(self.save_quote)
        layout.addWidget(self.quote_view)
        layout.addWidget(save_button)
        self.tabs.addTab(tab, "Quote")

    def _build_exit_tab(self) -> None:
        tab = QWidget()
        layout = QVBoxLayout(tab)
        exit_button = QPushButton("Exit")
        exit_button.clicked.connect(self.close)
        layout.addWidget(QLabel("Press Exit when you are done."))
        layout.addWidget(exit_button)
        self.tabs.addTab(tab, "Exit")

    def _build_help_tab(self) -> None:
        tab = QWidget()
        layout = QVBoxLayout(tab)
        content = QLabel(
            f"""
<h2>Help</h2>
<h3>Quick start</h3>
<ol>
  <li>Enter a premium, or a TIV and rate, for each written coverage</li>
  <li>Enter effective, expiration and endorsement dates (YYYY-MM-DD or MM/DD/YYYY)</li>
  <li>Fill in broker fee, down payment, APR and payments, then press <b>Calculate</b></li>
</ol>

<h3>CSV format</h3>
<p><code>{",".join(COVERAGE_CSV_HEADERS)}</code><br>
Only <code>name</code> is required.</p>

<h3>Rules</h3>
<ul>
  <li>Tax applies to the prorated premium; the carrier fee is added after tax</li>
  <li>Commission is based on the full-term premium</li>
  <li>Percentages are limited to 0-100</li>
  <li>Financed broker fee cannot exceed the total broker fee</li>
  <li>A blank down payment means {self.config.down_payment.default_pct}% down</li>
</ul>
"""
        )
        content.setTextFormat(Qt.TextFormat.RichText)
        content.setWordWrap(True)
        content.setTextInteractionFlags(Qt.TextInteractionFlag.NoTextInteraction)
        content.setFocusPolicy(Qt.FocusPolicy.NoFocus)

        scroll = QScrollArea()
        scroll.setWidgetResizable(True)
        scroll.setFocusPolicy(Qt.FocusPolicy.NoFocus)
        wrapper = QWidget()
        wrapper_layout = QVBoxLayout(wrapper)
        wrapper_layout.addWidget(content)
        wrapper_layout.addStretch(1)
        scroll.setWidget(wrapper)

        layout.addWidget(scroll)
        self.tabs.addTab(tab, "Help")

    def _cell_text(self, row: int, column: int) -> str:
        item = self.lines_table.item(row, column)
        return item.text().strip() if item is not None else ""

    def _lines_from_table(self) -> list[CoverageLine]:
        lines: list[CoverageLine] = []
        for row in range(self.lines_table.rowCount()):
            values = {
                header: self._cell_text(row, column)
                for column, header in enumerate(COVERAGE_CSV_HEADERS)
            }
            if not values["name"]:
                values["name"] = f"Line {row + 1}"
            lines.append(CoverageLine(**values))
        return lines

    def _policy_from_form(self) -> PolicyInputs:
        return PolicyInputs(
            total_broker_fee=self.broker_fee_input.text(),
            financed_broker_fee=self.financed_broker_fee_input.text(),
            down_payment_pct=self.down_payment_input.text(),
            apr=self.apr_input.text(),
            number_of_payments=self.payments_input.text(),
            payment_status=self.payment_status_input.isChecked(),
        )

    def _append_line_row(self, line: CoverageLine) -> None:
        row = self.lines_table.rowCount()
        self.lines_table.insertRow(row)
        self._write_line_row(row, line)

    def _write_line_row(self, row: int, line: CoverageLine) -> None:
        blocked = self.lines_table.blockSignals(True)
        for column, header in enumerate(COVERAGE_CSV_HEADERS):
            value = getattr(line, header)
            self.lines_table.setItem(row, column, QTableWidgetItem("" if value is None else str(value)))
        self.lines_table.blockSignals(blocked)

    def _render_lines(self, lines: list[CoverageLine]) -> None:
        self.lines_table.setRowCount(0)
        for line in lines:
            self._append_line_row(line)

    def _on_line_cell_changed(self, row: int, column: int) -> None:
        text = self._cell_text(row, column)
        formatted = format_field(COVERAGE_CSV_HEADERS[column], text)
        if formatted != text:
            blocked = self.lines_table.blockSignals(True)
            self.lines_table.setItem(row, column, QTableWidgetItem(formatted))
            self.lines_table.blockSignals(blocked)

        if column != EFFECTIVE_COLUMN:
            return
        expiration = auto_expiration(text, self.config.dates.formats)
        if expiration:
            blocked = self.lines_table.blockSignals(True)
            self.lines_table.setItem(row, EXPIRATION_COLUMN, QTableWidgetItem(expiration))
            self.lines_table.blockSignals(blocked)

    def remove_selected_line(self) -> None:
        row = self.lines_table.currentRow()
        if row < 0:
            QMessageBox.information(self, "Notice", "Select a line to remove.")
            return
        self.lines_table.removeRow(row)

    def apply_date_to_all(self, date_type: str) -> None:
        try:
            self._render_lines(apply_dates_to_all(self._lines_from_table(), date_type))
        except Exception as error:  # pylint: disable=broad-except
            QMessageBox.critical(self, "Error", str(error))

    def calculate(self) -> None:
        try:
            result = self.proration_service.calculate(
                self._lines_from_table(),
                self._policy_from_form(),
            )
        except Exception as error:  # pylint: disable=broad-except
            QMessageBox.critical(self, "Error", str(error))
            return

        self._last_result = result
        self.notices_view.setPlainText(
            "\n".join(f"[{notice.level}] {notice.message}" for notice in result.notices)
        )
        if result.blocked:
            self.results_table.setRowCount(0)
            self.summary_label.setText("")
            self.quote_view.setHtml("")
            QMessageBox.critical(
                self,
                "Calculation blocked",
                "\n".join(notice.message for notice in result.errors),
            )
            return

        self._render_results(result)
        self.quote_view.setHtml(render_quote_html(result))

    def _render_results(self, result: CalculationResult) -> None:
        self.results_table.setRowCount(len(result.lines))
        for row_index, line in enumerate(result.lines):
            for column, cell in enumerate(line_cells(line)):
                self.results_table.setItem(row_index, column, QTableWidgetItem(cell))

        totals = result.totals
        self.summary_label.setText(
            f"<b>Coverage total:</b> {format_dollar(totals.coverage_sum)} &nbsp; "
            f"<b>Down payment:</b> {format_dollar(totals.total_down_payment)} &nbsp; "
            f"<b>Earned broker fee:</b> {format_dollar(totals.earned_broker_fee)} &nbsp; "
            f"<b>Financed:</b> {format_dollar(totals.financed_amount)} &nbsp; "
            f"<b>APR:</b> {format_percent(totals.apr)} &nbsp; "
            f"<b>{totals.number_of_payments} payments of</b> {format_dollar(totals.monthly_payment)}"
        )

    def save_quote(self) -> None:
        if self._last_result is None or self._last_result.blocked:
            QMessageBox.information(self, "Notice", "Calculate a quote first.")
            return
        file_path, _ = QFileDialog.getSaveFileName(
            self,
            "Save quote",
            "quote.html",
            "HTML Files (*.html)",
        )
        if not file_path:
            return
        try:
            Path(file_path).write_text(render_quote_html(self._last_result), encoding="utf-8")
            QMessageBox.information(self, "Done", f"Quote saved: {file_path}")
        except Exception as error:  # pylint: disable=broad-except
            QMessageBox.critical(self, "Save error", str(error))

    def import_lines_from_csv(self) -> None:
        file_path, _ = QFileDialog.getOpenFileName(
            self,
            "Select coverage CSV",
            "",
            "CSV Files (*.csv)",
        )
        if not file_path:
            return

        task = ImportCoverageCsvTask(self.csv_import_service, file_path)
        task.signals.done.connect(self._show_import_result)
        task.signals.error.connect(
            lambda message: QMessageBox.critical(self, "CSV error", message)
        )
        self.thread_pool.start(task)

    def _show_import_result(self, lines: list, failed_count: int, details: str) -> None:
        if lines:
            self._render_lines(lines)
        message = f"Coverage CSV loaded\nLines: {len(lines)}\nFailed: {failed_count}"
        if details:
            message += f"\n\nFailures (up to 10)\n{details}"
        QMessageBox.information(self, "CSV result", message)
