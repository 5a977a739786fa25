"""Sheet names, column labels and literals of the accruals report."""

from dataclasses import dataclass

SOURCE_SHEET = "Начисления"
RETURNS_SHEET = "grouping возвраты"
GROUPING_SHEET = "grouping"

# Row 1 is a banner, row 2 holds the headers
HEADER_ROW = 2

ID_COLUMN = "ID начисления"
GROUP_COLUMN = "Группа услуг"
TYPE_COLUMN = "Тип начисления"
AMOUNT_COLUMN = "Сумма итого, руб"

MARKER_COLUMN = "Вид"
CANCELLATION_COLUMN = "Отмена"

RETURNS_GROUP = "Возвраты"
CANCELLATION_TYPE = "Обработка операционных ошибок продавца: отмена"
SPECIAL_MARKER = "Д"


@dataclass
class GroupingConfig:
    """Layout of an accruals workbook and the literals that drive grouping.

    Attributes:
        source_sheet: Sheet holding the accruals export.
        header_row: 1-based row number of the header row; data follows it.
        returns_sheet: Output sheet for the returns table.
        grouping_sheet: Output sheet for the grouped accruals table.
        id_column: Accrual ID header label.
        group_column: Service group header label.
        type_column: Accrual type header label.
        amount_column: Total amount header label (kopecks once cleaned).
        returns_group: Service group value that marks a return.
        cancellation_type: Accrual type summed into the cancellation column.
        special_marker: Value written to the marker column for flagged keys.
        marker_column: Leading output column holding the special marker.
        cancellation_column: Output column summing cancellation accruals.
    """

    source_sheet: str = SOURCE_SHEET
    header_row: int = HEADER_ROW
    returns_sheet: str = RETURNS_SHEET
    grouping_sheet: str = GROUPING_SHEET
    id_column: str = ID_COLUMN
    group_column: str = GROUP_COLUMN
    type_column: str = TYPE_COLUMN
    amount_column: str = AMOUNT_COLUMN
    returns_group: str = RETURNS_GROUP
    cancellation_type: str = CANCELLATION_TYPE
    special_marker: str = SPECIAL_MARKER
    marker_column: str = MARKER_COLUMN
    cancellation_column: str = CANCELLATION_COLUMN

    @property
    def returns_required(self) -> list[str]:
        return [self.id_column, self.group_column, self.amount_column]

    @property
    def grouping_required(self) -> list[str]:
        return [self.id_column, self.group_column, self.type_column, self.amount_column]
