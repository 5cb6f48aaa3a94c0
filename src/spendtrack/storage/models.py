"""Data models for stored expenses."""
from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from typing import Any, Optional

from pydantic import BaseModel, Field, field_validator
from pydantic import ValidationError as PydanticValidationError

from spendtrack.aggregation.aggregator import to_amount
from spendtrack.filters.resolver import format_date_iso
from spendtrack.utils.exceptions import ValidationError

AMOUNT_MESSAGE = "Please enter a positive number for the amount."
CATEGORY_MESSAGE = "Please enter a category."
DATE_MESSAGE = "Please enter the date as YYYY-MM-DD."


@dataclass
class ExpenseRecord:
    """One row of the expenses table."""
    id: int
    amount: Any
    category: str
    note: Optional[str] = None
    date: Optional[str] = None


class ExpenseInput(BaseModel):
    """Pydantic schema for a new or edited expense."""
    amount: Decimal = Field(description="Positive amount in currency units")
    category: str = Field(description="Free-text category label")
    note: Optional[str] = Field(default=None, description="Optional note")
    date: str = Field(
        default_factory=lambda: format_date_iso(datetime.now()),
        description="Calendar date in YYYY-MM-DD format"
    )

    @field_validator("amount", mode="before")
    @classmethod
    def _positive_amount(cls, value):
        amount = to_amount(value)
        if amount <= 0:
            raise ValueError(AMOUNT_MESSAGE)
        return amount

    @field_validator("category", mode="before")
    @classmethod
    def _required_category(cls, value):
        text = value.strip() if isinstance(value, str) else ""
        if not text:
            raise ValueError(CATEGORY_MESSAGE)
        return text

    @field_validator("note", mode="before")
    @classmethod
    def _optional_note(cls, value):
        if value is None:
            return None
        text = str(value).strip()
        return text or None

    @field_validator("date", mode="before")
    @classmethod
    def _iso_date(cls, value):
        if value is None or value == "":
            return format_date_iso(datetime.now())
        if isinstance(value, (date, datetime)):
            return format_date_iso(value)
        text = str(value).strip()
        try:
            parsed = date.fromisoformat(text)
        except ValueError:
            raise ValueError(DATE_MESSAGE)
        if parsed.isoformat() != text:
            raise ValueError(DATE_MESSAGE)
        return text

    @classmethod
    def build(cls, **fields) -> "ExpenseInput":
        """Validate fields, raising spendtrack's ValidationError with a user-facing message."""
        try:
            return cls(**fields)
        except PydanticValidationError as e:
            message = e.errors()[0]["msg"]
            if message.startswith("Value error, "):
                message = message[len("Value error, "):]
            raise ValidationError(message) from e
