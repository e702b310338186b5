#!/usr/bin/env python3

import sys
import json
from config import get_seed_dir
from cli.arguments import confirm
from logger import get_logger

logger = get_logger()


def cmd_list(args, services):
    """List categories in the database."""
    categories = services.categories.find_all(enabled_only=args.enabled)

    if not categories:
        logger.info("No categories found.")
        return

    logger.info("\nCategories:")
    logger.info("=" * 80)
    for category in categories:
        status = "" if category.enabled else "  (disabled)"
        logger.info(f"{category.id:>4}  {category.name:<30} {category.color}{status}")

    logger.info(f"\nTotal categories: {len(categories)}")


def cmd_create(args, services):
    """Create a new category."""
    name = args.name.strip()
    if not name:
        logger.error("Category name cannot be empty.")
        sys.exit(1)

    try:
        category = services.categories.create(name, args.color)
    except Exception as e:
        logger.error(f"Error creating category: {e}")
        sys.exit(1)

    logger.info(f"\n✓ Category created successfully with ID: {category.id}")
    logger.info(f"  Name: {category.name}")
    logger.info(f"  Color: {category.color}")


def _set_enabled(args, services, enabled):
    try:
        category = services.categories.set_enabled(args.category_id, enabled)
    except Exception as e:
        logger.error(f"Error updating category: {e}")
        sys.exit(1)

    state = "enabled" if enabled else "disabled"
    logger.info(f"✓ Category '{category.name}' {state}.")


def cmd_enable(args, services):
    """Show a category in pickers again."""
    _set_enabled(args, services, True)


def cmd_disable(args, services):
    """Hide a category from pickers; existing payments keep it."""
    _set_enabled(args, services, False)


def cmd_delete(args, services):
    """Delete a category by ID."""
    category_id = args.category_id

    category = services.categories.find(category_id)
    if not category:
        logger.error(f"Category with ID {category_id} not found.")
        sys.exit(1)

    affected = services.payments.find_by_category(category_id)

    logger.info("\nCategory to delete:")
    logger.info(f"  ID: {category.id}")
    logger.info(f"  Name: {category.name}")
    if affected:
        logger.info(f"  {len(affected)} payment(s) will become uncategorized")

    if not confirm("\nAre you sure you want to delete this category?", args.yes):
        logger.info("Deletion cancelled.")
        return

    try:
        if services.categories.delete(category_id):
            logger.info(f"✓ Category '{category.name}' deleted successfully.")
        else:
            logger.error("Failed to delete category.")
            sys.exit(1)
    except Exception as e:
        logger.error(f"Error deleting category: {e}")
        sys.exit(1)


def cmd_seed(args, services):
    """Seed the default categories from JSON file."""
    seed_file = get_seed_dir() / "categories.json"

    if not seed_file.exists():
        logger.error(f"Seed file not found: {seed_file}")
        sys.exit(1)

    try:
        with open(seed_file, "r") as f:
            categories_data = json.load(f)
    except json.JSONDecodeError as e:
        logger.error(f"Error parsing JSON file: {e}")
        sys.exit(1)

    logger.info("\nSeeding categories from db/seed/categories.json")
    logger.info("=" * 80)

    created_count = 0
    skipped_count = 0

    for category_data in categories_data:
        name = category_data.get("name")
        color = category_data.get("color", "#9E9E9E")

        if not name:
            logger.warning("Skipping category with no name")
            continue

        if services.categories.find_by_name(name):
            logger.info(f"⊘ Skipped '{name}' (already exists)")
            skipped_count += 1
            continue

        try:
            category = services.categories.create(name, color)
            logger.info(f"✓ Created '{name}' (ID: {category.id})")
            created_count += 1
        except Exception as e:
            logger.error(f"Error creating category '{name}': {e}")

    logger.info("=" * 80)
    logger.info("\nSeeding complete!")
    logger.info(f"Created: {created_count}")
    logger.info(f"Skipped: {skipped_count}")


def setup_parser(subparsers):
    """Setup categories subcommand parser.

    Args:
        subparsers: The subparsers object from the main CLI
    """
    parser = subparsers.add_parser(
        "categories",
        help="Manage categories",
        description="Create, list, enable/disable and delete payment categories",
    )

    categories_subparsers = parser.add_subparsers(
        title="subcommands",
        description="Available category commands",
        dest="subcommand",
        required=True,
    )

    # categories list
    list_parser = categories_subparsers.add_parser("list", help="List all categories")
    list_parser.add_argument(
        "--enabled", action="store_true", help="Only show enabled categories"
    )
    list_parser.set_defaults(func=cmd_list)

    # categories create
    create_parser = categories_subparsers.add_parser("create", help="Create a new category")
    create_parser.add_argument("name", help="Category name (unique)")
    create_parser.add_argument("--color", default="#9E9E9E", help="Display colour")
    create_parser.set_defaults(func=cmd_create)

    # categories enable / disable
    for name, func, help_text in (
        ("enable", cmd_enable, "Enable a category"),
        ("disable", cmd_disable, "Disable a category"),
    ):
        toggle_parser = categories_subparsers.add_parser(name, help=help_text)
        toggle_parser.add_argument("category_id", type=int, help="ID of the category")
        toggle_parser.set_defaults(func=func)

    # categories delete
    delete_parser = categories_subparsers.add_parser(
        "delete", help="Delete a category by ID"
    )
    delete_parser.add_argument(
        "category_id",
        type=int,
        help="ID of the category to delete",
    )
    delete_parser.add_argument("--yes", action="store_true", help="Skip confirmation")
    delete_parser.set_defaults(func=cmd_delete)

    # categories seed
    seed_parser = categories_subparsers.add_parser(
        "seed", help="Seed default categories from JSON file"
    )
    seed_parser.set_defaults(func=cmd_seed)
