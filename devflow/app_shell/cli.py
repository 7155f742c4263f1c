import argparse
import logging
import os
import sys
from pathlib import Path

from devflow.adapters.clock import SystemClock
from devflow.adapters.sqlite.database import Database
from devflow.adapters.sqlite.repos import SQLiteUserRepo
from devflow.components.users import CreateUserInput, run_create_user
from devflow.rules.loader import DEFAULT_RULES_PATH, load_rules
from devflow.rules.models import Rules

logger = logging.getLogger("cli")


def get_rules() -> Rules:
    path = Path(os.environ.get("DEVFLOW_RULES_PATH", str(DEFAULT_RULES_PATH)))
    if not path.exists():
        logger.error("Rules file %s not found.", path)
        sys.exit(1)
    return load_rules(path)


def open_database(rules: Rules, url: str | None) -> Database:
    """Connect to ``url``, falling back to the environment, then a local file."""
    url = url or os.environ.get(rules.database.url_env) or f"sqlite:///{rules.database.name}.db"
    database = Database(url, env_var=rules.database.url_env)
    database.connect()
    if not database.connected:
        logger.error("Could not connect to the database.")
        sys.exit(1)
    return database


def handle_migrate(database: Database, args: argparse.Namespace) -> None:
    # Pending migrations are applied on connect.
    print(f"Database ready: {database.url}")


def handle_create_user(database: Database, args: argparse.Namespace) -> None:
    result = run_create_user(
        CreateUserInput(
            clerk_id=args.clerk_id,
            name=args.name,
            username=args.username,
            email=args.email,
        ),
        users=SQLiteUserRepo(database),
        time=SystemClock(),
    )
    if not result.success or result.user is None:
        logger.error("Create user failed: %s", result.errors[0].message)
        sys.exit(1)
    print(f"User created: {result.user.id} (@{result.user.username})")


def main(argv: list[str] | None = None) -> None:
    logging.basicConfig(level=logging.INFO)

    parser = argparse.ArgumentParser(description="DevFlow CLI")
    parser.add_argument("--url", help="Database URL (defaults to the environment)")
    subparsers = parser.add_subparsers(dest="command", required=True)

    # migrate
    subparsers.add_parser("migrate", help="Create or upgrade the database schema")

    # create-user
    user_parser = subparsers.add_parser("create-user", help="Register a user")
    user_parser.add_argument("clerk_id", help="External identity provider id")
    user_parser.add_argument("--name", required=True)
    user_parser.add_argument("--username", required=True)
    user_parser.add_argument("--email", required=True)

    args = parser.parse_args(argv)

    rules = get_rules()
    database = open_database(rules, args.url)
    try:
        if args.command == "migrate":
            handle_migrate(database, args)
        elif args.command == "create-user":
            handle_create_user(database, args)
    finally:
        database.close()


if __name__ == "__main__":
    main()
