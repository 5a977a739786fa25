"""Returns extraction and accrual grouping.

Both passes work on the header row and the raw data rows of the accruals
sheet and build a :class:`SheetTable` without touching the workbook. Rows are
assumed to be padded to the header width. Only the ID, group, type and amount
cells are read as text; other cells pass through as is.
"""

from decimal import Decimal
from typing import Any, Callable

from accrual_grouping.config import GroupingConfig
from accrual_grouping.models import GroupingSetting, GroupRecord, ReturnRecord, SheetTable
from accrual_grouping.parsing import cell_text, ensure_required, normalize_accrual_id, parse_amount

Report = Callable[[str], None]


def _parse_row_amount(value: Any, report: Report) -> Decimal | None:
    raw = cell_text(value)
    try:
        return parse_amount(raw)
    except ValueError as e:
        report(f"Ошибка парсинга суммы '{raw}': {e}")
        return None


def extract_returns(
    headers: list[str],
    rows: list[list[Any]],
    config: GroupingConfig | None = None,
    report: Report = print,
) -> SheetTable:
    """Collapse return rows into one row per grouping key.

    Each key keeps the first return row seen (in sheet order) as a template
    for the other columns; the ID is replaced with the key and the amount
    with the sum over all the key's returns. The accrual type column is
    dropped. Output rows are sorted by key.

    Raises:
        MissingColumnsError: If the ID, group or amount column is missing
    """
    config = config or GroupingConfig()
    positions = ensure_required(headers, config.returns_required)
    id_idx = positions[config.id_column]
    group_idx = positions[config.group_column]
    amount_idx = positions[config.amount_column]

    records: dict[str, ReturnRecord] = {}
    for row in rows:
        if cell_text(row[group_idx]) != config.returns_group:
            continue

        key = normalize_accrual_id(cell_text(row[id_idx]))
        amount = _parse_row_amount(row[amount_idx], report)
        if amount is None:
            continue

        record = records.get(key)
        if record is None:
            records[key] = ReturnRecord(key=key, total=amount, template=list(row))
        else:
            record.total += amount

    out_headers = [h for h in headers if h != config.type_column]
    table = SheetTable(headers=out_headers)
    for key in sorted(records):
        record = records[key]
        out_row = []
        for header in out_headers:
            if header == config.id_column:
                out_row.append(record.key)
            elif header == config.amount_column:
                out_row.append(record.total)
            else:
                out_row.append(record.template[positions[header]])
        table.rows.append(out_row)

    return table


def resolve_target(
    accrual_type: str, rules: dict[str, GroupingSetting]
) -> tuple[str, bool]:
    """Return the output column for an accrual type and its special flag."""
    setting = rules.get(accrual_type)
    if setting is None:
        return accrual_type, False
    return setting.target, setting.special


def group_accruals(
    headers: list[str],
    rows: list[list[Any]],
    rules: dict[str, GroupingSetting],
    config: GroupingConfig | None = None,
    report: Report = print,
) -> SheetTable:
    """Sum non-return accruals per grouping key and target column.

    The table starts with the marker, ID and cancellation columns, followed
    by every target column in sorted order. Cancellation accruals go to the
    cancellation column only. A target column that is zero for every key is
    left out; the three leading columns are always present.

    Raises:
        MissingColumnsError: If any of the four required columns is missing
    """
    config = config or GroupingConfig()
    positions = ensure_required(headers, config.grouping_required)
    id_idx = positions[config.id_column]
    group_idx = positions[config.group_column]
    type_idx = positions[config.type_column]
    amount_idx = positions[config.amount_column]

    accruals = [row for row in rows if cell_text(row[group_idx]) != config.returns_group]

    targets = {resolve_target(cell_text(row[type_idx]), rules)[0] for row in accruals}

    groups: dict[str, GroupRecord] = {}
    for row in accruals:
        amount = _parse_row_amount(row[amount_idx], report)
        if amount is None:
            continue

        key = normalize_accrual_id(cell_text(row[id_idx]))
        record = groups.setdefault(key, GroupRecord(key=key))

        accrual_type = cell_text(row[type_idx])
        if accrual_type == config.cancellation_type:
            record.cancellation += amount
            continue

        target, special = resolve_target(accrual_type, rules)
        record.add(target, amount)
        if special and amount != 0:
            record.marker = config.special_marker

    columns = [
        target
        for target in sorted(targets)
        if any(record.columns.get(target, 0) != 0 for record in groups.values())
    ]

    fixed = [config.marker_column, config.id_column, config.cancellation_column]
    table = SheetTable(headers=fixed + columns)
    for key in sorted(groups):
        record = groups[key]
        table.rows.append(
            [record.marker, record.key, record.cancellation]
            + [record.columns.get(target, Decimal("0")) for target in columns]
        )

    return table
