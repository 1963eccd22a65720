"""
Console Input Validation

DESIGN DECISION: Parsing and retrying are separate steps.

STEP 1 - PARSING:
- Each parser turns one raw console answer into a ParseResult
- Parsers never raise and never print
- The formats are the same ones the record codec stores

STEP 2 - COLLECTING:
- The collector asks, parses, reports the error and asks again
- It stops at the first valid answer or when the attempt limit is hit
- No limit is the default: a field is asked until it is valid

IMPORTANT: Validation NEVER silently fixes input.
The only normalisation is trimming whitespace and uppercasing currencies.
"""

from typing import Callable, Optional

from tenacity import Retrying, retry_if_result, stop_after_attempt, stop_never

from ledger.config import get_settings
from ledger.models.transaction import ParseResult, check_record_text
from ledger.services.storage.codec import parse_amount, parse_date, parse_id


class InputAbortedError(Exception):
    """A field was not answered validly within the attempt limit."""

    def __init__(self, attempts: int, last_error: Optional[str]):
        self.attempts = attempts
        self.last_error = last_error
        super().__init__(f"No valid input after {attempts} attempts: {last_error}")


# =============================================================================
# PARSERS
# =============================================================================

def parse_amount_input(text: str) -> ParseResult:
    try:
        return ParseResult.success(parse_amount(text))
    except ValueError:
        return ParseResult.failure("Invalid amount. Please enter a decimal number, e.g. 125.50.")


def parse_date_input(text: str) -> ParseResult:
    try:
        return ParseResult.success(parse_date(text))
    except ValueError:
        return ParseResult.failure("Invalid date format. Please enter the date as MM.DD.YYYY.")


def parse_description_input(text: str) -> ParseResult:
    """Descriptions may be empty but must fit in a single record field."""
    description = text.strip()
    try:
        check_record_text(description, "Description")
    except ValueError as e:
        return ParseResult.failure(f"{e}. Please enter it without commas.")
    return ParseResult.success(description)


def parse_id_input(text: str) -> ParseResult:
    try:
        return ParseResult.success(parse_id(text))
    except ValueError:
        return ParseResult.failure("Invalid ID. Please enter a whole number.")


def parse_currency_input(text: str) -> ParseResult:
    """Currency codes are uppercased; any label is accepted otherwise."""
    currency = text.strip().upper()
    try:
        check_record_text(currency, "Currency")
    except ValueError as e:
        return ParseResult.failure(f"{e}. Please enter a code such as USD, EUR or UAH.")
    return ParseResult.success(currency)


# =============================================================================
# COLLECTOR
# =============================================================================

class InputCollector:
    """
    Asks for one field until a parser accepts the answer.

    Usage:
        collector = InputCollector()
        amount = collector.collect(lambda: input("Amount: "), parse_amount_input, print)
    """

    def __init__(self, max_attempts: Optional[int] = None):
        """
        Initialize the collector.

        Args:
            max_attempts: Give up after this many answers.
                         If None, ``LEDGER_MAX_INPUT_ATTEMPTS`` applies
                         (unset means ask forever).
        """
        if max_attempts is None:
            max_attempts = get_settings().app.max_input_attempts
        self._max_attempts = max_attempts

    @property
    def max_attempts(self) -> Optional[int]:
        return self._max_attempts

    def collect(
        self,
        ask: Callable[[], str],
        parse: Callable[[str], ParseResult],
        on_error: Callable[[str], None],
    ):
        """
        Ask, parse and report until the answer is valid.

        Returns:
            The parsed value

        Raises:
            InputAbortedError: If the attempt limit was reached
        """
        def attempt() -> ParseResult:
            result = parse(ask())
            if not result.ok:
                on_error(result.error or "Invalid input.")
            return result

        retrying = Retrying(
            stop=stop_after_attempt(self._max_attempts) if self._max_attempts else stop_never,
            retry=retry_if_result(lambda result: not result.ok),
            retry_error_callback=lambda state: state.outcome.result(),
        )
        result = retrying(attempt)

        if not result.ok:
            raise InputAbortedError(self._max_attempts or 0, result.error)
        return result.value
