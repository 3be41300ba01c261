"""The fixed reference list of spending categories."""

from finance_app.core.models import Category

DEFAULT_CATEGORIES: tuple[Category, ...] = (
    Category(id="1", name="Food & Dining", color="#EF4444", icon="UtensilsCrossed"),
    Category(id="2", name="Transportation", color="#3B82F6", icon="Car"),
    Category(id="3", name="Shopping", color="#8B5CF6", icon="ShoppingBag"),
    Category(id="4", name="Entertainment", color="#F59E0B", icon="Film"),
    Category(id="5", name="Bills & Utilities", color="#10B981", icon="Receipt"),
    Category(id="6", name="Healthcare", color="#EC4899", icon="Heart"),
    Category(id="7", name="Education", color="#6366F1", icon="GraduationCap"),
    Category(id="8", name="Travel", color="#14B8A6", icon="Plane"),
    Category(id="9", name="Investment", color="#84CC16", icon="TrendingUp"),
    Category(id="10", name="Other", color="#6B7280", icon="MoreHorizontal"),
)


def list_categories() -> list[Category]:
    """Return the reference categories in display order."""
    return list(DEFAULT_CATEGORIES)


def find_category(name: str) -> Category | None:
    """Look up a reference category by its exact name."""
    return next((c for c in DEFAULT_CATEGORIES if c.name == name), None)
