"""
Install and uninstall hooks.

Run from the command line::

    forget-me-not install
    forget-me-not uninstall
"""

from __future__ import annotations

import argparse
import asyncio
import sys
from collections.abc import Sequence

from forget_me_not.config import get_settings
from forget_me_not.exclusions.store import ExclusionStoreProtocol, VariableExclusionStore
from forget_me_not.shared.database import DatabaseManager
from forget_me_not.shared.exceptions import StorageError
from forget_me_not.shared.logging import get_logger, setup_logging
from forget_me_not.variables.repository import VariableRepository

logger = get_logger(__name__)


async def install(manager: DatabaseManager) -> None:
    """Create the tables the exclusion list is stored in."""
    await manager.create_all()
    logger.info("Schema installed")


async def uninstall(store: ExclusionStoreProtocol) -> None:
    """Delete the stored exclusion list so no configuration is left behind."""
    await store.delete()
    logger.info("Exclusion list removed on uninstall")


async def _run(command: str, manager: DatabaseManager) -> None:
    try:
        if command == "install":
            await install(manager)
        elif command == "uninstall":
            settings = get_settings()
            async with manager.session() as session:
                store = VariableExclusionStore(
                    VariableRepository(session),
                    variable_name=settings.exclusions_variable_name,
                )
                await uninstall(store)
    finally:
        await manager.close()


def main(argv: Sequence[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="forget-me-not",
        description="Manage the forget-me-not exclusion list storage.",
    )
    parser.add_argument("command", choices=["install", "uninstall"])
    parser.add_argument(
        "--database-url",
        default=None,
        help="Override the configured database URL.",
    )
    args = parser.parse_args(argv)

    setup_logging()
    manager = DatabaseManager(args.database_url)
    try:
        asyncio.run(_run(args.command, manager))
    except StorageError as e:
        logger.error("Lifecycle command failed", extra={"command": args.command, "error": e.message})
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
