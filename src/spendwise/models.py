"""Data models for transactions, categories and budget alerts."""

from dataclasses import dataclass, field
from typing import Any

# Alert severities
WARNING = "warning"
DANGER = "danger"


@dataclass(frozen=True)
class ColumnMapping:
    """Header names detected for the date, description and amount fields."""

    date_column: str | None = None
    description_column: str | None = None
    amount_column: str | None = None

    @property
    def is_complete(self) -> bool:
        """Return True if every field was resolved to a header."""
        return not self.missing_fields()

    def missing_fields(self) -> list[str]:
        """Return the names of the fields that could not be detected."""
        missing = []
        if self.date_column is None:
            missing.append("date")
        if self.description_column is None:
            missing.append("description")
        if self.amount_column is None:
            missing.append("amount")
        return missing

    def to_dict(self) -> dict[str, str | None]:
        """Convert to dictionary for JSON output."""
        return {
            "date_column": self.date_column,
            "description_column": self.description_column,
            "amount_column": self.amount_column,
        }


@dataclass(frozen=True)
class CategoryRule:
    """A keyword rule that assigns a spending category."""

    category: str
    keywords: tuple[str, ...]
    color: str
    icon: str
    budget: float

    def matches(self, text: str) -> bool:
        """Check if any keyword occurs in the (lowercase) search text."""
        return any(keyword in text for keyword in self.keywords)


@dataclass(frozen=True)
class Transaction:
    """Represents a normalized, categorized expense."""

    id: str
    date: str
    description: str
    merchant: str
    amount: float
    category: str
    original_data: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, str]:
        """Convert to dictionary for CSV output."""
        return {
            "id": self.id,
            "date": self.date,
            "description": self.description,
            "merchant": self.merchant,
            "amount": f"{self.amount:.2f}",
            "category": self.category,
        }


@dataclass(frozen=True)
class Category:
    """Aggregated spend for one category, with its display metadata."""

    name: str
    total: float
    count: int
    color: str
    icon: str
    budget: float

    @property
    def percentage_used(self) -> float:
        """Share of the budget already spent, in percent."""
        return self.total / self.budget * 100

    @property
    def remaining(self) -> float:
        """Budget left over (negative when overspent)."""
        return self.budget - self.total

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON output."""
        return {
            "name": self.name,
            "total": round(self.total, 2),
            "count": self.count,
            "color": self.color,
            "icon": self.icon,
            "budget": self.budget,
            "percentage_used": round(self.percentage_used, 1),
            "remaining": round(self.remaining, 2),
        }


@dataclass(frozen=True)
class BudgetAlert:
    """Raised when a category's spend crosses 80% of its budget."""

    category: str
    spent: float
    budget: float
    percentage: float
    severity: str  # warning, danger

    @property
    def is_overspent(self) -> bool:
        """Return True if the budget has been exceeded."""
        return self.severity == DANGER

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON output."""
        return {
            "category": self.category,
            "spent": round(self.spent, 2),
            "budget": self.budget,
            "percentage": round(self.percentage, 1),
            "severity": self.severity,
        }


@dataclass(frozen=True)
class PipelineResult:
    """Everything derived from one uploaded dataset."""

    mapping: ColumnMapping
    transactions: tuple[Transaction, ...]
    categories: tuple[Category, ...]
    alerts: tuple[BudgetAlert, ...]

    @property
    def total_spent(self) -> float:
        """Sum of all category totals."""
        return sum(category.total for category in self.categories)

    @property
    def total_budget(self) -> float:
        """Sum of the budgets of the categories that saw spending."""
        return sum(category.budget for category in self.categories)

    @property
    def remaining_budget(self) -> float:
        """Total budget minus total spend."""
        return self.total_budget - self.total_spent
