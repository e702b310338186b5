"""Category service for database operations."""

from typing import List, Optional
from models.category import Category


class CategoryService:
    """Service for managing categories."""

    def __init__(self, db_manager):
        """Initialize the category service.

        Args:
            db_manager: Database manager instance for database operations.
        """
        self.db_manager = db_manager

    def find_all(self, enabled_only: bool = False) -> List[Category]:
        """Get all categories from the database.

        Args:
            enabled_only: If True, skip disabled categories (picker view).

        Returns:
            List of Category objects, ordered by name.
        """
        query = "SELECT id, name, color, enabled FROM categories"
        if enabled_only:
            query += " WHERE enabled = 1"
        query += " ORDER BY name"

        with self.db_manager.connect() as conn:
            rows = conn.execute(query).fetchall()
            return [self._row_to_category(row) for row in rows]

    def find(self, category_id: int) -> Optional[Category]:
        """Get a single category by ID.

        Args:
            category_id: The category ID to find.

        Returns:
            Category object if found, None otherwise.
        """
        with self.db_manager.connect() as conn:
            cursor = conn.execute(
                "SELECT id, name, color, enabled FROM categories WHERE id = ?",
                (category_id,),
            )
            row = cursor.fetchone()

            if row:
                return self._row_to_category(row)
            return None

    def find_by_name(self, name: str) -> Optional[Category]:
        """Get a single category by name.

        Args:
            name: The category name to find.

        Returns:
            Category object if found, None otherwise.
        """
        with self.db_manager.connect() as conn:
            cursor = conn.execute(
                "SELECT id, name, color, enabled FROM categories WHERE name = ?",
                (name,),
            )
            row = cursor.fetchone()

            if row:
                return self._row_to_category(row)
            return None

    def create(self, name: str, color: str, enabled: bool = True) -> Category:
        """Create a new category.

        Args:
            name: Category name (should be unique).
            color: Display colour, e.g. "#4CAF50".
            enabled: Whether the category shows up in pickers.

        Returns:
            The created Category object with id populated.

        Raises:
            sqlite3.IntegrityError: If the name is already taken.
        """
        with self.db_manager.connect() as conn:
            cursor = conn.execute(
                "INSERT INTO categories (name, color, enabled) VALUES (?, ?, ?)",
                (name, color, 1 if enabled else 0),
            )
            conn.commit()

            return Category(
                id=cursor.lastrowid, name=name, color=color, enabled=enabled
            )

    def update(
        self, category_id: int, name: str, color: str, enabled: bool
    ) -> Category:
        """Update an existing category.

        Args:
            category_id: The category ID to update.
            name: New category name.
            color: New display colour.
            enabled: New enabled flag.

        Returns:
            The updated Category object.

        Raises:
            Exception: If category not found or update fails.
        """
        with self.db_manager.connect() as conn:
            cursor = conn.execute(
                "UPDATE categories SET name = ?, color = ?, enabled = ? WHERE id = ?",
                (name, color, 1 if enabled else 0, category_id),
            )
            conn.commit()

            if cursor.rowcount == 0:
                raise Exception(f"Category with ID {category_id} not found")

            return Category(id=category_id, name=name, color=color, enabled=enabled)

    def set_enabled(self, category_id: int, enabled: bool) -> Category:
        """Enable or disable a category without touching its other fields.

        Raises:
            Exception: If category not found.
        """
        category = self.find(category_id)
        if category is None:
            raise Exception(f"Category with ID {category_id} not found")

        return self.update(category_id, category.name, category.color, enabled)

    def delete(self, category_id: int) -> bool:
        """Delete a category by ID.

        Payments in the category are kept and become uncategorized.

        Args:
            category_id: The category ID to delete.

        Returns:
            True if category was deleted, False if not found.
        """
        with self.db_manager.connect() as conn:
            conn.execute(
                "UPDATE payments SET category_id = NULL WHERE category_id = ?",
                (category_id,),
            )
            cursor = conn.execute("DELETE FROM categories WHERE id = ?", (category_id,))
            conn.commit()
            return cursor.rowcount > 0

    def _row_to_category(self, row: tuple) -> Category:
        return Category(id=row[0], name=row[1], color=row[2], enabled=bool(row[3]))
