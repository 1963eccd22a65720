"""
Core Data Models for the Personal Finance Ledger

These models define the strict schemas for all data flowing through the system.
They are designed to:
1. Enforce type safety at runtime
2. Keep every value representable in the ledger file
3. Give the console shell a typed answer for every parsed input

DESIGN DECISION: Amounts are Decimal, never float.
Sums of many small amounts must not drift.
"""

import datetime
from decimal import Decimal
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


# Characters that would split or terminate a record line
FORBIDDEN_TEXT_CHARS = (",", "\n", "\r")


def check_record_text(value: str, field_name: str) -> str:
    for char in FORBIDDEN_TEXT_CHARS:
        if char in value:
            shown = "a comma" if char == "," else "a line break"
            raise ValueError(f"{field_name} cannot contain {shown}")
    return value


# =============================================================================
# CORE TRANSACTION MODEL
# =============================================================================

class Transaction(BaseModel):
    """
    A single recorded income or expense.

    Transactions are created by the ledger store (which assigns the id and
    the current currency) or rebuilt from a stored record.
    """
    model_config = ConfigDict(str_strip_whitespace=True)

    id: int = Field(
        ...,
        ge=1,
        description="Sequential ledger ID, never reused"
    )
    amount: Decimal = Field(
        ...,
        description="Signed amount (negative = expense, positive = income)"
    )
    date: datetime.date = Field(
        ...,
        description="Calendar date of the transaction"
    )
    description: str = Field(
        default="",
        description="Free-form description, may be empty"
    )
    currency: str = Field(
        ...,
        description="Currency label copied from the ledger at creation time"
    )

    @field_validator('description')
    @classmethod
    def validate_description(cls, v: str) -> str:
        return check_record_text(v, "Description")

    @field_validator('currency')
    @classmethod
    def validate_currency(cls, v: str) -> str:
        return check_record_text(v, "Currency")


# =============================================================================
# INPUT PARSING MODELS
# =============================================================================

class ParseResult(BaseModel):
    """
    Outcome of parsing one piece of console input.

    Either ``ok`` with a ``value``, or not ``ok`` with a human-readable
    ``error``. Parsers never raise for bad input.
    """

    ok: bool = Field(
        ...,
        description="Did the input parse?"
    )
    value: Any = Field(
        default=None,
        description="Parsed value when ok"
    )
    error: Optional[str] = Field(
        default=None,
        description="Why the input was rejected"
    )

    @classmethod
    def success(cls, value: Any) -> "ParseResult":
        return cls(ok=True, value=value)

    @classmethod
    def failure(cls, error: str) -> "ParseResult":
        return cls(ok=False, error=error)
