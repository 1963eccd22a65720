"""
Console Frontend for the Personal Finance Ledger

An interactive menu: the user picks an action by number, answers its
prompts, sees the result, and the menu comes back until they exit.

DESIGN PRINCIPLES:
1. The menu only talks to the ledger store
2. Bad answers are re-asked field by field
3. Storage problems are shown, never fatal
4. Log output goes to stderr; the menu owns stdout
"""

from decimal import Decimal
from pathlib import Path
from typing import Callable, Optional

import typer

from ledger.audit import configure_logging
from ledger.config import get_settings
from ledger.models.transaction import ParseResult
from ledger.services.storage import format_amount
from ledger.store import LedgerStore, create_ledger_store
from ledger.validation import (
    InputAbortedError,
    InputCollector,
    parse_amount_input,
    parse_currency_input,
    parse_date_input,
    parse_description_input,
    parse_id_input,
)


APP_TITLE = "Finance Manager"

MENU = "\n".join([
    "",
    "Menu:",
    "",
    "1. Add transaction",
    "2. Show transactions",
    "3. Show balance",
    "4. Set currency",
    "5. Delete transaction",
    "6. Exit",
    "",
])

EXIT_CHOICE = "6"


def ask(prompt: str) -> str:
    """Read one answer; an empty answer is returned as ''."""
    return typer.prompt(prompt, default="", show_default=False, prompt_suffix=": ")


class LedgerShell:
    """
    Menu loop around a ledger store.

    Each numbered action maps to one method; ``run`` keeps presenting
    the menu until the exit choice is made.
    """

    def __init__(
        self,
        store: LedgerStore,
        collector: Optional[InputCollector] = None,
        echo: Callable[[str], None] = typer.echo,
    ):
        self._store = store
        self._collector = collector or InputCollector()
        self._echo = echo
        self._actions: dict[str, Callable[[], None]] = {
            "1": self.add_transaction,
            "2": self.show_transactions,
            "3": self.show_balance,
            "4": self.set_currency,
            "5": self.delete_transaction,
        }

    def _field(self, prompt: str, parse: Callable[[str], ParseResult]):
        return self._collector.collect(lambda: ask(prompt), parse, self._echo)

    def _report(self, error: Optional[str]) -> None:
        if error:
            self._echo(error)

    # ------------------------------------------------------------------
    # Actions
    # ------------------------------------------------------------------

    def add_transaction(self) -> None:
        amount: Decimal = self._field("Enter amount", parse_amount_input)
        date = self._field("Enter date (MM.DD.YYYY)", parse_date_input)
        description: str = self._field("Enter description", parse_description_input)

        transaction, error = self._store.add(amount, date, description)
        self._echo(f"Transaction {transaction.id} added.")
        self._report(error)

    def show_transactions(self) -> None:
        blocks = self._store.render_transactions()
        if not blocks:
            self._echo("No transactions yet.")
            return
        for block in blocks:
            self._echo(block)

    def show_balance(self) -> None:
        line = f"| Current balance: {format_amount(self._store.balance())} {self._store.get_currency()}        |"
        rule = "=" * 36
        self._echo(f"\n{rule}\n{line}\n{rule}")

    def set_currency(self) -> None:
        currency: str = self._field("Enter new currency (e.g., USD, EUR, UAH)", parse_currency_input)
        self._store.set_currency(currency)
        self._echo(f"Currency set to {self._store.get_currency()}")

    def delete_transaction(self) -> None:
        transaction_id: int = self._field("Enter ID of the transaction to delete", parse_id_input)

        found, error = self._store.delete(transaction_id)
        if found:
            self._echo(f"Transaction with ID {transaction_id} deleted.")
        else:
            self._echo("Transaction not found.")
        self._report(error)

    # ------------------------------------------------------------------
    # Loop
    # ------------------------------------------------------------------

    def handle(self, choice: str) -> bool:
        """
        Run one menu choice.

        Returns False when the choice was the exit choice.
        """
        choice = choice.strip()
        if choice == EXIT_CHOICE:
            return False

        action = self._actions.get(choice)
        if action is None:
            self._echo("Invalid choice. Please try again.")
            return True

        try:
            action()
        except InputAbortedError as e:
            self._echo(f"Action cancelled: {e.last_error}")
        return True

    def run(self) -> None:
        self._report(self._store.load_error)
        while True:
            self._echo(MENU)
            if not self.handle(ask("Choose an action")):
                return


app = typer.Typer(
    name="ledger",
    help=f"{APP_TITLE}: record, list, delete and total your transactions.",
    add_completion=False,
)


@app.command()
def main(
    file: Optional[Path] = typer.Option(
        None,
        "--file",
        "-f",
        help="Ledger file (default: LEDGER_FILE_PATH or transactions.txt)",
    ),
    currency: Optional[str] = typer.Option(
        None,
        "--currency",
        "-c",
        help="Starting currency (default: LEDGER_DEFAULT_CURRENCY or UAH)",
    ),
) -> None:
    """Run the interactive ledger menu."""
    configure_logging(get_settings().app.effective_log_level)

    if currency is not None:
        parsed = parse_currency_input(currency)
        if not parsed.ok:
            raise typer.BadParameter(parsed.error or "Invalid currency", param_hint="--currency")
        currency = parsed.value

    typer.echo(APP_TITLE)
    store = create_ledger_store(file_path=file, currency=currency)
    LedgerShell(store).run()


def run() -> None:
    """Console script entry point."""
    app()


if __name__ == "__main__":
    run()
