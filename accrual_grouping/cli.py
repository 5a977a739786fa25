"""Command-line entry point: regroup every accruals workbook in a directory.

Usage:
  accrual-grouping
  accrual-grouping /path/to/reports --settings rules.txt
  accrual-grouping --no-pause --quiet
"""

import argparse
import sys
from pathlib import Path

from accrual_grouping.settings import DEFAULT_SETTINGS_FILE, read_grouping_settings
from accrual_grouping.workbook import Processor

# Excel keeps "~$name.xlsx" lock files next to open workbooks
LOCK_FILE_PREFIX = "~$"


def find_workbooks(directory: Path) -> list[Path]:
    """List .xlsx files directly inside ``directory``, sorted by name."""
    return sorted(
        p
        for p in directory.glob("*.xlsx")
        if p.is_file() and not p.name.startswith(LOCK_FILE_PREFIX)
    )


def wait_for_any_key() -> None:
    print("\nНажмите любую клавишу для выхода...")
    try:
        sys.stdin.readline()
    except (OSError, ValueError):
        pass


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        prog="accrual-grouping",
        description="Add 'grouping' and 'grouping возвраты' sheets to accruals workbooks.",
    )
    ap.add_argument(
        "directory",
        nargs="?",
        default=".",
        help="Folder with .xlsx files (default: current directory)",
    )
    ap.add_argument(
        "--settings",
        default=DEFAULT_SETTINGS_FILE,
        help="Rule file, relative to the folder unless absolute (default: settings.txt)",
    )
    ap.add_argument("--no-pause", action="store_true", help="Exit without waiting for a key")
    ap.add_argument("--quiet", action="store_true", help="Do not report per-row problems")
    return ap


def run(directory: Path, settings_path: Path, debug: bool = True) -> int:
    """Process every workbook in ``directory``; return the number saved."""
    try:
        workbooks = find_workbooks(directory)
    except OSError as e:
        print(f"Ошибка при поиске .xlsx файлов: {e}")
        return 0

    if not workbooks:
        print("Не найдено .xlsx файлов в текущей директории")
        return 0

    try:
        settings = read_grouping_settings(settings_path)
    except (OSError, UnicodeDecodeError) as e:
        print(f"Ошибка при чтении файла настроек: {e}")
        return 0

    processor = Processor(settings, debug=debug)
    saved = 0
    for path in workbooks:
        print(f"Обработка файла: {path}")
        if not processor.identify(path):
            print(f"Файл {path} не содержит лист '{processor.config.source_sheet}', пропущен")
            continue
        if processor.process(path):
            saved += 1

    print("\nОбработка всех файлов завершена.")
    return saved


def main(argv: list[str] | None = None) -> int:
    """Entry point for the command-line interface."""
    args = build_parser().parse_args(argv)

    directory = Path(args.directory)
    settings_path = Path(args.settings)
    if not settings_path.is_absolute():
        settings_path = directory / settings_path

    run(directory, settings_path, debug=not args.quiet)

    if not args.no_pause:
        wait_for_any_key()
    return 0


if __name__ == "__main__":
    sys.exit(main())
