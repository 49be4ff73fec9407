"""Command line entry for the Phonebook service."""

from __future__ import annotations

import argparse
import logging
from typing import List, Optional

import uvicorn

from phonebook.core.config import settings

logger = logging.getLogger("phonebook")


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Run the Phonebook GraphQL server.")
    parser.add_argument("--host", default=settings.HOST, help="Interface to bind (default: %(default)s)")
    parser.add_argument("--port", type=int, default=settings.PORT, help="Port to listen on (default: %(default)s)")
    return parser.parse_args(argv)


def run_server(host: str, port: int) -> None:
    from phonebook.api.main import app

    logger.info("Server ready at http://%s:%d/graphql", host, port)
    uvicorn.run(app, host=host, port=port, log_level=settings.LOG_LEVEL.lower())


def main(argv: Optional[List[str]] = None) -> None:
    logging.basicConfig(
        level=settings.LOG_LEVEL.upper(),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    args = parse_args(argv)
    run_server(args.host, args.port)


if __name__ == "__main__":
    main()
