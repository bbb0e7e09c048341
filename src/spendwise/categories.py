"""Keyword rules that assign transactions to spending categories."""

from spendwise.models import CategoryRule

FALLBACK_CATEGORY = "Others"
FALLBACK_COLOR = "#6B7280"
FALLBACK_ICON = "more-horizontal"
FALLBACK_BUDGET = 500.0

# Closed set of icon identifiers and the glyph each one renders as
ICONS: dict[str, str] = {
    "utensils": "🍴",
    "shopping-bag": "🛍",
    "car": "🚗",
    "play-circle": "▶",
    "book-open": "📖",
    "hospital": "🏥",
    "zap": "⚡",
    "more-horizontal": "…",
}

# Order matters: the first rule with a matching keyword wins.
CATEGORY_RULES: tuple[CategoryRule, ...] = (
    CategoryRule(
        category="Food & Dining",
        keywords=(
            "zomato", "swiggy", "uber eats", "dominos", "mcdonald", "kfc", "pizza",
            "restaurant", "cafe", "food", "dining", "eat", "meal",
        ),
        color="#EF4444",
        icon="utensils",
        budget=1000.0,
    ),
    CategoryRule(
        category="Shopping",
        keywords=(
            "amazon", "flipkart", "myntra", "nykaa", "shopping", "retail", "store",
            "mall", "purchase", "buy",
        ),
        color="#8B5CF6",
        icon="shopping-bag",
        budget=1500.0,
    ),
    CategoryRule(
        category="Transportation",
        keywords=(
            "uber", "ola", "taxi", "metro", "bus", "train", "petrol", "fuel",
            "transport", "travel",
        ),
        color="#06B6D4",
        icon="car",
        budget=800.0,
    ),
    CategoryRule(
        category="Entertainment",
        keywords=(
            "netflix", "spotify", "amazon prime", "hotstar", "movie", "cinema",
            "entertainment", "gaming", "music",
        ),
        color="#F59E0B",
        icon="play-circle",
        budget=500.0,
    ),
    CategoryRule(
        category="Education",
        keywords=(
            "course", "udemy", "coursera", "books", "education", "learning", "study",
            "fees", "tuition",
        ),
        color="#10B981",
        icon="book-open",
        budget=2000.0,
    ),
    CategoryRule(
        category="Healthcare",
        keywords=(
            "medical", "pharmacy", "hospital", "doctor", "medicine", "health",
            "clinic", "appointment",
        ),
        color="#EC4899",
        icon="hospital",
        budget=1000.0,
    ),
    CategoryRule(
        category="Utilities",
        keywords=(
            "electricity", "water", "gas", "internet", "mobile", "phone", "recharge",
            "bill", "utility",
        ),
        color="#6366F1",
        icon="zap",
        budget=800.0,
    ),
)

FALLBACK_RULE = CategoryRule(
    category=FALLBACK_CATEGORY,
    keywords=(),
    color=FALLBACK_COLOR,
    icon=FALLBACK_ICON,
    budget=FALLBACK_BUDGET,
)


def categorize(description: str, merchant: str | None = None) -> CategoryRule:
    """
    Find the category rule for a transaction.

    Matching is a case-insensitive substring test with no word boundaries,
    so "eat" also matches "meat".

    Args:
        description: Transaction description
        merchant: Optional merchant name, appended to the search text

    Returns:
        The first matching rule, or the fallback "Others" rule
    """
    text = f"{description} {merchant or ''}".lower()

    for rule in CATEGORY_RULES:
        if rule.matches(text):
            return rule

    return FALLBACK_RULE


def find_rule(name: str) -> CategoryRule | None:
    """Look up a catalog rule by category name."""
    for rule in CATEGORY_RULES:
        if rule.category == name:
            return rule
    return None


def category_names() -> list[str]:
    """All category names in priority order, ending with the fallback."""
    return [rule.category for rule in CATEGORY_RULES] + [FALLBACK_CATEGORY]


def render_icon(icon: str) -> str:
    """Return the glyph for an icon identifier, or the fallback glyph."""
    return ICONS.get(icon, ICONS[FALLBACK_ICON])
