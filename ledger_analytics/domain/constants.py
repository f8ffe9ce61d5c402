"""Domain constants for transaction analytics."""

from enum import Enum


class TransactionType(str, Enum):
    """Closed set of transaction types."""

    INCOME = "Income"
    EXPENSE = "Expense"
    INVESTMENT = "Investment"
    TRANSFER = "Transfer"


class RejectionReason(str, Enum):
    """Reasons a raw record is excluded from every view."""

    INVALID_AMOUNT = "InvalidAmount"
    INVALID_DATE = "InvalidDate"
    UNKNOWN_TYPE = "UnknownType"


DEFAULT_SOURCE = "Other"

WEEKDAY_LABELS = ("Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat")

DEFAULT_WINDOW_DAYS = 30
DEFAULT_MAX_TREND_BUCKETS = 15
DEFAULT_RADAR_TOP_N = 6

# Largest accepted power of ten in an amount (below a quadrillion).
MAX_AMOUNT_EXPONENT = 14

CATEGORIES_BY_TYPE = {
    TransactionType.EXPENSE: (
        "Personal",
        "University",
        "Food",
        "Transport",
        "Subscriptions",
        "Entertainment",
        "Health",
        "Books",
        "Rent",
        "Bills",
        "Gifts",
        "Other",
    ),
    TransactionType.INCOME: (
        "Freelancing (Mostaql)",
        "Pocket Money",
        "Salary",
        "Gift",
        "Business",
        "Bonus",
        "Refund",
        "Other",
    ),
    TransactionType.INVESTMENT: (
        "Gold",
        "Stock Trading",
        "Crypto",
        "Real Estate",
        "NFT",
        "Other",
    ),
    TransactionType.TRANSFER: ("Transfer",),
}

KNOWN_SOURCES = (
    "Vodafone Cash",
    "InstaPay",
    "National Bank of Egypt",
    "Banque Misr",
    "CIB Bank",
    "Apple Pay",
    "Cash",
    "Wallet",
    "Credit Card (Barq)",
    "Other",
)


__all__ = [
    "TransactionType",
    "RejectionReason",
    "DEFAULT_SOURCE",
    "WEEKDAY_LABELS",
    "DEFAULT_WINDOW_DAYS",
    "DEFAULT_MAX_TREND_BUCKETS",
    "DEFAULT_RADAR_TOP_N",
    "MAX_AMOUNT_EXPONENT",
    "CATEGORIES_BY_TYPE",
    "KNOWN_SOURCES",
]
