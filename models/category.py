"""Category model for payment categorization."""

from dataclasses import dataclass


@dataclass
class Category:
    """Represents a user-defined payment category.

    Attributes:
        id: Unique identifier (auto-generated).
        name: Category name (unique).
        color: Display colour hint, e.g. "#4CAF50".
        enabled: Disabled categories are hidden from pickers but stay
                 attached to existing payments.
    """

    id: int
    name: str
    color: str
    enabled: bool = True
