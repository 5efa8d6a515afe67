"""Rule-based merchant categorization."""

import logging
from collections.abc import Iterable, Sequence

from .models import Category, Transaction

logger = logging.getLogger(__name__)

FALLBACK_CATEGORY = "Others"

# Keyword order is significant: the first keyword found in the merchant wins.
DEFAULT_RULES: list[tuple[str, str]] = [
    ("food", "Food"),
    ("restaurant", "Food"),
    ("mcdonald", "Food"),
    ("kfc", "Food"),
    ("grocery", "Groceries"),
    ("amazon", "Shopping"),
    ("flipkart", "Shopping"),
    ("electricity", "Utilities"),
    ("power", "Utilities"),
    ("rent", "Rent"),
    ("uber", "Transport"),
    ("ola", "Transport"),
    ("fuel", "Fuel"),
    ("petrol", "Fuel"),
]


class KeywordCategorizer:
    """
    Categorizes merchants with an ordered keyword list.

    Flow:
    1. First rule whose keyword appears in the merchant
    2. Otherwise, first existing category whose name contains the merchant
    3. Otherwise, the fallback category
    """

    def __init__(
        self,
        rules: Sequence[tuple[str, str]] = DEFAULT_RULES,
        fallback: str = FALLBACK_CATEGORY,
    ):
        """
        Initialize the categorizer.

        Args:
            rules: (keyword, category name) pairs, checked in order
            fallback: Category used when nothing matches
        """
        self.rules = [(keyword.lower(), category) for keyword, category in rules]
        self.fallback = fallback

    def categorize(
        self, merchant: str | None, categories: Sequence[Category] = ()
    ) -> str:
        """
        Pick a category name for a merchant.

        Args:
            merchant: Free-text merchant or description
            categories: The user's existing categories

        Returns:
            Category name
        """
        text = (merchant or "").lower()

        if not text:
            return self.fallback

        for keyword, category in self.rules:
            if keyword in text:
                logger.debug(f"Rule '{keyword}' matched '{merchant}' -> {category}")
                return category

        # The merchant text must appear inside the category name, not the reverse
        for category in categories:
            if text in (category.name or "").lower():
                logger.debug(f"Category name match for '{merchant}' -> {category.name}")
                return category.name

        return self.fallback

    def categorize_transactions(
        self, transactions: Iterable[Transaction], categories: Sequence[Category] = ()
    ) -> int:
        """
        Fill in blank categories on transactions.

        This mutates the transactions in place.

        Returns:
            Number of transactions that were categorized
        """
        filled = 0
        for transaction in transactions:
            if transaction.category.strip():
                continue
            transaction.category = self.categorize(transaction.merchant, categories)
            filled += 1

        if filled:
            logger.info(f"Auto-categorized {filled} transactions")

        return filled
