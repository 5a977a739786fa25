from .config import GroupingConfig
from .grouping import extract_returns, group_accruals, resolve_target
from .workbook import Processor, read_sheet_rows, write_sheet

# Parsing helpers
from .parsing import (
    MissingColumnsError,
    cell_text,
    ensure_required,
    normalize_accrual_id,
    parse_amount,
)

# Rule file
from .settings import (
    build_rule_lookup,
    parse_settings_lines,
    read_grouping_settings,
)

# Data models
from .models import (
    GroupingSetting,
    GroupRecord,
    ReturnRecord,
    SheetTable,
)

__all__ = [
    # Processing
    "GroupingConfig",
    "Processor",
    "extract_returns",
    "group_accruals",
    "resolve_target",
    "read_sheet_rows",
    "write_sheet",
    # Parsing
    "MissingColumnsError",
    "cell_text",
    "ensure_required",
    "normalize_accrual_id",
    "parse_amount",
    # Rule file
    "build_rule_lookup",
    "parse_settings_lines",
    "read_grouping_settings",
    # Data models
    "GroupingSetting",
    "GroupRecord",
    "ReturnRecord",
    "SheetTable",
]
