#!/usr/bin/env python3

import sys
from cli.arguments import amount_arg, confirm
from logger import get_logger
from tools.formatting import format_money

logger = get_logger()


def cmd_list(args, services):
    """List accounts in the database."""
    accounts = services.accounts.find_all(active_only=not args.all)

    if not accounts:
        logger.info("No accounts found.")
        return

    logger.info("\nAccounts:")
    logger.info("=" * 80)
    for account in accounts:
        logger.info(f"ID: {account.id}")
        logger.info(f"Name: {account.name}")
        if account.description:
            logger.info(f"Description: {account.description}")
        logger.info(f"Balance: {format_money(account.balance, account.currency)}")
        if not account.active:
            logger.info("Status: inactive")
        logger.info("-" * 80)

    logger.info(f"\nTotal accounts: {len(accounts)}")


def cmd_create(args, services):
    """Create a new account."""
    name = args.name.strip()
    if not name:
        logger.error("Account name cannot be empty.")
        sys.exit(1)

    try:
        account = services.accounts.create(
            name, args.description, args.balance, args.currency.upper()
        )
    except Exception as e:
        logger.error(f"Error creating account: {e}")
        sys.exit(1)

    logger.info(f"\n✓ Account created successfully with ID: {account.id}")
    logger.info(f"  Name: {account.name}")
    logger.info(f"  Balance: {format_money(account.balance, account.currency)}")


def cmd_update(args, services):
    """Update fields of an existing account; unspecified fields are kept."""
    account = services.accounts.find(args.account_id)
    if not account:
        logger.error(f"Account with ID {args.account_id} not found.")
        sys.exit(1)

    active = account.active
    if args.activate:
        active = True
    elif args.deactivate:
        active = False

    try:
        account = services.accounts.update(
            account.id,
            args.name or account.name,
            args.description if args.description is not None else account.description,
            args.balance if args.balance is not None else account.balance,
            (args.currency or account.currency).upper(),
            active,
        )
    except Exception as e:
        logger.error(f"Error updating account: {e}")
        sys.exit(1)

    status = "active" if account.active else "inactive"
    logger.info(f"✓ Account '{account.name}' updated ({status}).")


def cmd_delete(args, services):
    """Delete an account by ID. Its transactions are kept, unassigned."""
    account = services.accounts.find(args.account_id)
    if not account:
        logger.error(f"Account with ID {args.account_id} not found.")
        sys.exit(1)

    logger.info(f"\nAccount to delete: {account.name} (ID: {account.id})")
    logger.info("Incomes and payments in this account will be kept without an account.")

    if not confirm("\nAre you sure you want to delete this account?", args.yes):
        logger.info("Deletion cancelled.")
        return

    if services.accounts.delete(account.id):
        logger.info(f"✓ Account '{account.name}' deleted successfully.")
    else:
        logger.error("Failed to delete account.")
        sys.exit(1)


def setup_parser(subparsers):
    """Setup accounts subcommand parser.

    Args:
        subparsers: The subparsers object from the main CLI
    """
    parser = subparsers.add_parser(
        "accounts",
        help="Manage accounts",
        description="Create, list, update and delete accounts",
    )

    accounts_subparsers = parser.add_subparsers(
        title="subcommands",
        description="Available account commands",
        dest="subcommand",
        required=True,
    )

    # accounts list
    list_parser = accounts_subparsers.add_parser("list", help="List accounts")
    list_parser.add_argument(
        "--all", action="store_true", help="Include inactive accounts"
    )
    list_parser.set_defaults(func=cmd_list)

    # accounts create
    create_parser = accounts_subparsers.add_parser("create", help="Create a new account")
    create_parser.add_argument("name", help="Account name (unique)")
    create_parser.add_argument("--description", help="Human-readable description")
    create_parser.add_argument(
        "--balance", type=amount_arg, default=amount_arg("0"), help="Reference balance"
    )
    create_parser.add_argument("--currency", default="USD", help="ISO currency code")
    create_parser.set_defaults(func=cmd_create)

    # accounts update
    update_parser = accounts_subparsers.add_parser("update", help="Update an account")
    update_parser.add_argument("account_id", type=int, help="ID of the account")
    update_parser.add_argument("--name")
    update_parser.add_argument("--description")
    update_parser.add_argument("--balance", type=amount_arg)
    update_parser.add_argument("--currency")
    status_group = update_parser.add_mutually_exclusive_group()
    status_group.add_argument("--activate", action="store_true")
    status_group.add_argument(
        "--deactivate",
        action="store_true",
        help="Hide the account from default views and filters",
    )
    update_parser.set_defaults(func=cmd_update)

    # accounts delete
    delete_parser = accounts_subparsers.add_parser("delete", help="Delete an account by ID")
    delete_parser.add_argument("account_id", type=int, help="ID of the account to delete")
    delete_parser.add_argument("--yes", action="store_true", help="Skip confirmation")
    delete_parser.set_defaults(func=cmd_delete)
