"""Category and goal data models."""

from dataclasses import dataclass, field

MIN_PRIORITY = 1
MAX_PRIORITY = 5
DEFAULT_PRIORITY = "3"


@dataclass
class Category:
    """A user-scoped label goals are grouped under."""

    id: str
    user_id: str
    name: str
    type: str
    color: str | None = None
    icon: str | None = None

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "user_id": self.user_id,
            "name": self.name,
            "type": self.type,
            "color": self.color,
            "icon": self.icon,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Category":
        return cls(
            id=data["id"],
            user_id=data["user_id"],
            name=data["name"],
            type=data.get("type") or "",
            color=data.get("color"),
            icon=data.get("icon"),
        )


@dataclass
class Goal:
    """A goal belonging to one category and one user."""

    id: str
    user_id: str
    category_id: str
    title: str
    description: str | None = None
    target_date: str | None = None  # ISO date
    priority: int | None = None
    status: str = ""

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "user_id": self.user_id,
            "category_id": self.category_id,
            "title": self.title,
            "description": self.description,
            "target_date": self.target_date,
            "priority": self.priority,
            "status": self.status,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Goal":
        return cls(
            id=data["id"],
            user_id=data["user_id"],
            category_id=data["category_id"],
            title=data["title"],
            description=data.get("description"),
            target_date=data.get("target_date"),
            priority=data.get("priority"),
            status=data.get("status") or "",
        )


@dataclass
class NewCategory:
    """Category form input."""

    name: str
    type: str
    color: str = ""
    icon: str = ""

    def to_row(self, user_id: str) -> dict:
        return {
            "user_id": user_id,
            "name": self.name,
            "type": self.type,
            "color": self.color or None,
            "icon": self.icon or None,
        }


@dataclass
class NewGoal:
    """Goal form input, kept as the raw strings the form submits."""

    title: str = ""
    description: str = ""
    category_id: str = ""
    target_date: str = ""
    priority: str = DEFAULT_PRIORITY

    def to_row(self, user_id: str) -> dict:
        """Build the insert payload for ``goals``.

        Priority is the only field coerced; a non-numeric value raises
        ValueError from ``int``.
        """
        return {
            "user_id": user_id,
            "category_id": self.category_id,
            "title": self.title,
            "description": self.description or None,
            "target_date": self.target_date or None,
            "priority": int(self.priority),
        }


@dataclass
class CategoryGoals:
    """A category together with the goals filed under it."""

    category: Category
    goals: list[Goal] = field(default_factory=list)


def group_goals_by_category(
    categories: list[Category], goals: list[Goal]
) -> list[CategoryGoals]:
    """Pair each category with its goals, preserving category order."""
    return [
        CategoryGoals(category, [g for g in goals if g.category_id == category.id])
        for category in categories
    ]
