"""Interactive prompts for categorization and budget alerts."""

import logging
from typing import Any

from prompt_toolkit import PromptSession
from prompt_toolkit.completion import Completer, Completion
from prompt_toolkit.document import Document

from .budgets import usage_percent
from .models import BudgetAlertState, Category

logger = logging.getLogger(__name__)


class CategoryCompleter(Completer):
    """Fuzzy search completer for category names."""

    def __init__(self, categories: list[Category]):
        """Initialize the completer with available categories."""
        self.names = []
        for cat in categories:
            if cat.name and cat.name not in self.names:
                self.names.append(cat.name)

    def get_completions(self, document: Document, complete_event: Any):
        """Get fuzzy-matched completions."""
        query = document.text.lower()

        if not query:
            # Show all categories when no query
            for name in self.names:
                yield Completion(text=name, start_position=0, display=name)
            return

        for name in self.names:
            if fuzzy_match(query, name.lower()):
                yield Completion(
                    text=name,
                    start_position=-len(document.text),
                    display=name,
                )


def fuzzy_match(query: str, text: str) -> bool:
    """
    Fuzzy match: all characters in query must appear in order in text.

    Example:
        query="gro" matches "groceries"
        query="tpt" matches "transport"
    """
    query_idx = 0
    for char in text:
        if query_idx < len(query) and char == query[query_idx]:
            query_idx += 1
    return query_idx == len(query)


def select_category_interactive(
    categories: list[Category],
    merchant: str,
    suggested_name: str | None = None,
) -> str | None:
    """
    Interactive category selection with fuzzy search.

    Args:
        categories: The user's categories
        merchant: Merchant being categorized
        suggested_name: Category picked by the keyword rules, pre-filled

    Returns:
        Selected category name, or None to keep the suggestion
    """
    print(f"\nCategorize: {merchant}")
    if suggested_name:
        print(f"   Suggested: {suggested_name}")
    print("   Type to search, press Enter to confirm, Ctrl+C to skip\n")

    completer = CategoryCompleter(categories)
    session: PromptSession[str] = PromptSession(completer=completer)
    known = {name.lower(): name for name in completer.names}
    default_text = suggested_name if suggested_name in completer.names else ""

    try:
        # Loop until valid category or skip
        while True:
            result = session.prompt(
                "Category: ",
                default=default_text or "",
                complete_while_typing=True,
            )

            if not result:
                return None

            name = known.get(result.strip().lower())
            if name:
                logger.info(f"User selected category: {name}")
                return name

            print(
                "Invalid category. Please select from the list or press Tab to complete."
            )
            default_text = ""

    except KeyboardInterrupt:
        print("\nSkipped")
        return None
    except EOFError:
        return None


def confirm_dismiss(alert: BudgetAlertState) -> bool:
    """
    Ask whether to dismiss a budget alert for the rest of the session.

    Returns:
        True if the user dismissed the alert
    """
    print(
        f"\nBudget alert: {alert.category_name} is at {usage_percent(alert)}% "
        f"({alert.spent:.2f} of {alert.limit:.2f})"
    )

    try:
        response = input("   Dismiss? [Y/n] ").strip().lower()
    except (KeyboardInterrupt, EOFError):
        return False

    return response in ("", "y", "yes")
