"""Rule file loading.

The rule file is plain UTF-8 text, one rule per line::

    Source accrual type#Target column
    Source accrual type#Target column#Д

Lines with fewer than two fields, or an empty source or target, are ignored.
"""

from pathlib import Path
from typing import Callable, Iterable

from accrual_grouping.models import GroupingSetting

DEFAULT_SETTINGS_FILE = "settings.txt"

FIELD_SEPARATOR = "#"
SPECIAL_FLAG = "Д"


def parse_settings_lines(lines: Iterable[str]) -> list[GroupingSetting]:
    """Parse rule lines into settings, preserving file order."""
    settings = []
    for line in lines:
        parts = line.rstrip("\r\n").split(FIELD_SEPARATOR)
        if len(parts) < 2:
            continue

        source = parts[0].strip()
        target = parts[1].strip()
        special = len(parts) >= 3 and parts[2].strip() == SPECIAL_FLAG

        if source and target:
            settings.append(GroupingSetting(source=source, target=target, special=special))

    return settings


def read_grouping_settings(path: str | Path) -> list[GroupingSetting]:
    """Read the rule file.

    Raises:
        OSError: If the file cannot be opened or read
        UnicodeDecodeError: If the file is not valid UTF-8
    """
    with open(path, encoding="utf-8") as f:
        return parse_settings_lines(f)


def build_rule_lookup(
    settings: list[GroupingSetting],
    report: Callable[[str], None] | None = None,
) -> dict[str, GroupingSetting]:
    """Index settings by source label; a repeated label keeps its last rule."""
    lookup: dict[str, GroupingSetting] = {}
    for setting in settings:
        previous = lookup.get(setting.source)
        if previous is not None and previous != setting and report is not None:
            report(
                f"Предупреждение: правило для '{setting.source}' задано повторно, "
                f"используется '{setting.target}'"
            )
        lookup[setting.source] = setting
    return lookup
