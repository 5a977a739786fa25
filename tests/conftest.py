"""Shared pytest fixtures for accrual-grouping tests."""

from pathlib import Path

import pytest
from openpyxl import Workbook

from accrual_grouping.config import GroupingConfig
from accrual_grouping.models import GroupingSetting
from accrual_grouping.settings import build_rule_lookup
from accrual_grouping.workbook import Processor

HEADERS = ["Дата", "ID начисления", "Группа услуг", "Тип начисления", "Сумма итого, руб", "Артикул"]


def make_row(accrual_id, group, accrual_type, amount, date="01.10.2025", sku="SKU-1"):
    """Build a data row laid out like HEADERS."""
    return [date, accrual_id, group, accrual_type, amount, sku]


# =============================================================================
# Rule Fixtures
# =============================================================================


@pytest.fixture
def fee_settings() -> list[GroupingSetting]:
    """Rules mapping "Плата" to "Сборы" without the special flag."""
    return [GroupingSetting(source="Плата", target="Сборы")]


@pytest.fixture
def marketplace_settings() -> list[GroupingSetting]:
    """A realistic rule set with one special column."""
    return [
        GroupingSetting(source="Вознаграждение за продажу", target="Комиссия"),
        GroupingSetting(source="Логистика", target="Доставка", special=True),
        GroupingSetting(source="Обратная логистика", target="Доставка", special=True),
        GroupingSetting(source="Эквайринг", target="Комиссия"),
    ]


@pytest.fixture
def marketplace_rules(marketplace_settings):
    return build_rule_lookup(marketplace_settings)


# =============================================================================
# Processor Fixtures
# =============================================================================


@pytest.fixture
def messages() -> list[str]:
    """Collects diagnostic lines reported by the code under test."""
    return []


@pytest.fixture
def processor(fee_settings, messages) -> Processor:
    """A processor with the fee rules, reporting into ``messages``."""
    return Processor(fee_settings, config=GroupingConfig(), report=messages.append)


# =============================================================================
# Excel File Fixtures
# =============================================================================


@pytest.fixture
def make_workbook(tmp_path):
    """Factory writing an accruals workbook: banner row, header row, data rows."""

    def _make(rows, name="accruals.xlsx", headers=HEADERS, sheet="Начисления") -> Path:
        wb = Workbook()
        ws = wb.active
        ws.title = sheet
        ws.append(["Начисления за период 01.10.2025 - 31.10.2025"])
        ws.append(headers)
        for row in rows:
            ws.append(row)

        file_path = tmp_path / name
        wb.save(file_path)
        return file_path

    return _make


@pytest.fixture
def scenario_rows() -> list[list]:
    """Two regular accruals for X-1 and one return for X-2."""
    return [
        make_row("X-1-A", "Обычные", "Плата", "1000"),
        make_row("X-1-B", "Обычные", "Плата", "500"),
        make_row("X-2-A", "Возвраты", "Плата", "-300"),
    ]


@pytest.fixture
def scenario_workbook(make_workbook, scenario_rows) -> Path:
    return make_workbook(scenario_rows)
