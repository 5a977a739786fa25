"""Data models for accrual workbook grouping."""

from decimal import Decimal
from typing import Any

from pydantic import BaseModel, Field, field_validator


class GroupingSetting(BaseModel):
    """One line of the rule file: source accrual type -> target column."""

    source: str
    target: str
    special: bool = False  # Third field "Д"

    @field_validator("source", "target", mode="before")
    @classmethod
    def strip_label(cls, v):
        """Labels are compared after trimming surrounding whitespace."""
        return v.strip() if isinstance(v, str) else v


class ReturnRecord(BaseModel):
    """Accumulated returns for one grouping key."""

    key: str
    total: Decimal = Decimal("0")
    template: list[Any] = Field(default_factory=list)  # First row seen for the key, raw cell values


class GroupRecord(BaseModel):
    """Accumulated non-return accruals for one grouping key."""

    key: str
    marker: str = ""
    cancellation: Decimal = Decimal("0")
    columns: dict[str, Decimal] = Field(default_factory=dict)

    def add(self, column: str, amount: Decimal) -> None:
        self.columns[column] = self.columns.get(column, Decimal("0")) + amount


class SheetTable(BaseModel):
    """A rectangular table ready to be written to a sheet."""

    headers: list[str] = Field(default_factory=list)
    rows: list[list[Any]] = Field(default_factory=list)
