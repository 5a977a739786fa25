"""Accruals workbook processing with openpyxl."""

import traceback
from pathlib import Path
from typing import Any, Callable

from openpyxl import load_workbook
from openpyxl.workbook.workbook import Workbook

from accrual_grouping.config import GroupingConfig
from accrual_grouping.grouping import extract_returns, group_accruals
from accrual_grouping.models import GroupingSetting, SheetTable
from accrual_grouping.parsing import MissingColumnsError, cell_text
from accrual_grouping.settings import build_rule_lookup


def read_sheet_rows(wb: Workbook, sheet_name: str) -> list[list[Any]]:
    """Read every row of a sheet as raw cell values, dropping trailing empty cells.

    Raises:
        KeyError: If the workbook has no sheet with that name
    """
    ws = wb[sheet_name]
    rows = []
    for values in ws.iter_rows(values_only=True):
        row = list(values)
        while row and row[-1] in (None, ""):
            row.pop()
        rows.append(row)

    # openpyxl reports blank trailing rows as part of the used range
    while rows and not rows[-1]:
        rows.pop()
    return rows


def write_sheet(wb: Workbook, sheet_name: str, table: SheetTable) -> None:
    """Replace ``sheet_name`` with a fresh sheet holding the table."""
    if sheet_name in wb.sheetnames:
        del wb[sheet_name]
    ws = wb.create_sheet(sheet_name)

    ws.append(table.headers)
    for row in table.rows:
        ws.append([None if value == "" else value for value in row])


class Processor:
    """Rewrites the grouping sheets of accruals workbooks in place."""

    def __init__(
        self,
        settings: list[GroupingSetting],
        config: GroupingConfig | None = None,
        debug: bool = True,
        report: Callable[[str], None] = print,
    ):
        """Initialize the processor.

        Args:
            settings: Rules loaded from the rule file, in file order.
            config: Workbook layout (default: the standard accruals export).
            debug: Report per-row problems and tracebacks (default: True).
            report: Sink for diagnostic lines (default: print).
        """
        self.config = config or GroupingConfig()
        self.debug = debug
        self.report = report
        self.rules = build_rule_lookup(settings, report=report)

    def _row_report(self, message: str) -> None:
        if self.debug:
            self.report(message)

    def identify(self, filepath: str | Path) -> bool:
        """Check if the file is an .xlsx workbook with the accruals sheet."""
        path = Path(filepath)

        if path.suffix.lower() != ".xlsx":
            return False

        try:
            wb = load_workbook(path, read_only=True)
            found = self.config.source_sheet in wb.sheetnames
            wb.close()
            return found
        except Exception:
            return False

    def _split_sheet(self, rows: list[list[Any]]) -> tuple[list[str], list[list[Any]]] | None:
        """Return the header labels and padded data rows, or None if too short."""
        header_idx = self.config.header_row - 1
        if len(rows) < header_idx + 2:
            self.report(f"Лист '{self.config.source_sheet}' содержит недостаточно данных")
            return None

        headers = [cell_text(v) for v in rows[header_idx]]
        width = len(headers)
        data = [row + [None] * (width - len(row)) for row in rows[header_idx + 1:] if row]
        return headers, data

    def _report_missing(self, error: MissingColumnsError) -> None:
        for column in error.missing:
            self.report(f"Не найден обязательный столбец: {column}")

    def transform(self, wb: Workbook, rows: list[list[Any]]) -> bool:
        """Write the returns and grouping sheets into an open workbook.

        ``rows`` are the source sheet's rows as returned by
        :func:`read_sheet_rows`. The two passes are independent; a pass that
        fails leaves its sheet untouched. Returns True if at least one sheet
        was written.
        """
        split = self._split_sheet(rows)
        if split is None:
            return False
        headers, data = split

        written = False
        try:
            returns = extract_returns(headers, data, self.config, report=self._row_report)
        except MissingColumnsError as e:
            self._report_missing(e)
        else:
            write_sheet(wb, self.config.returns_sheet, returns)
            self.report(f"Найдено и перенесено {len(returns.rows)} возвратов")
            written = True

        try:
            grouped = group_accruals(
                headers, data, self.rules, self.config, report=self._row_report
            )
        except MissingColumnsError as e:
            self._report_missing(e)
        else:
            write_sheet(wb, self.config.grouping_sheet, grouped)
            self.report(f"Создано {len(grouped.rows)} группированных записей")
            written = True

        return written

    def process(self, filepath: str | Path) -> bool:
        """Transform one workbook and save it over the original file.

        The source sheet is read from cached cell values (formula results);
        the sheets are written into a second, formula-preserving copy that
        is then saved. Any failure is reported and leaves the file on disk
        unchanged.
        """
        try:
            source = load_workbook(filepath, read_only=True, data_only=True)
        except Exception as e:
            self.report(f"Ошибка при открытии файла {filepath}: {e}")
            if self.debug:
                self.report(traceback.format_exc())
            return False

        try:
            rows = read_sheet_rows(source, self.config.source_sheet)
        except KeyError as e:
            self.report(f"Ошибка при чтении листа '{self.config.source_sheet}': {e}")
            return False
        finally:
            source.close()

        try:
            wb = load_workbook(filepath)
        except Exception as e:
            self.report(f"Ошибка при открытии файла {filepath}: {e}")
            if self.debug:
                self.report(traceback.format_exc())
            return False

        try:
            if not self.transform(wb, rows):
                return False
            wb.save(filepath)
        except Exception as e:
            self.report(f"Ошибка при сохранении файла {filepath}: {e}")
            if self.debug:
                self.report(traceback.format_exc())
            return False
        finally:
            wb.close()

        self.report(f"Файл {filepath} успешно обработан и сохранен")
        return True
