from __future__ import annotations

import argparse
import logging
import sys

from . import conf
from .exceptions import StoreUnavailable

logger = logging.getLogger(__name__)


def _parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="stock_ledger", description="Inventory borrow/return service."
    )
    parser.add_argument("--host", default=None, help="listen address (env HOST)")
    parser.add_argument("--port", type=int, default=None, help="listen port (env PORT)")
    parser.add_argument(
        "--create-schema",
        action="store_true",
        help="create missing tables before serving",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    """
    Start the service.

    Exits with status 1 when the store cannot be reached at startup.
    """
    args = _parser().parse_args(argv)
    conf.configure()

    from django.core.management import call_command
    from django.db import connections

    from .ledger import check_store
    from .schema import create_tables

    url = conf.database_url()
    try:
        check_store()
    except StoreUnavailable as exc:
        logger.error("Error connecting to database: %s", exc)
        logger.error("Connection string: %s", conf.redact_url(url))
        return 1
    logger.info("Connected to database successfully")

    if args.create_schema:
        created = create_tables()
        if created:
            logger.info("Created tables: %s", ", ".join(created))

    host = args.host or conf.listen_host()
    port = args.port or conf.listen_port()

    logger.info("Server running on port %s", port)
    logger.info("Access API at http://localhost:%s/api/products", port)

    try:
        call_command("runserver", f"{host}:{port}", use_reloader=False, use_threading=True)
    finally:
        connections.close_all()
    return 0


if __name__ == "__main__":
    sys.exit(main())
