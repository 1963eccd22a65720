"""Console input validation package."""

from ledger.validation.validator import (
    InputAbortedError,
    InputCollector,
    parse_amount_input,
    parse_currency_input,
    parse_date_input,
    parse_description_input,
    parse_id_input,
)

__all__ = [
    "InputAbortedError",
    "InputCollector",
    "parse_amount_input",
    "parse_currency_input",
    "parse_date_input",
    "parse_description_input",
    "parse_id_input",
]
