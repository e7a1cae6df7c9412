#!/usr/bin/env python3
"""
Main entry point for the expense tracker.

This script builds the transaction store, attaches the audit listener
and serves the REST API.
"""

import logging
import signal
import sys

from expense_tracker.api.rest_api import run_server
from expense_tracker.config.settings import get_settings
from expense_tracker.model.listener import LoggingListener
from expense_tracker.model.store import TransactionStore
from expense_tracker.utils.logger import setup_logging, get_logger, create_audit_logger

logger = get_logger("expense_tracker.server")


class ExpenseTrackerServer:
    """
    Main server class that wires the store, its listeners and the REST API.
    """

    def __init__(self):
        """Initialize the server."""
        self.settings = get_settings()
        self.store = TransactionStore()

        setup_logging(
            level=self.settings.log_level,
            log_file=self.settings.log_file
        )

        if self.settings.enable_audit_log:
            audit_logger = create_audit_logger(self.settings.audit_log_file)
            self.store.register(LoggingListener(audit_logger))

        logger.info("Expense tracker server initialized")

    def start(self) -> None:
        """Serve the REST API until interrupted."""
        run_server(self.store, self.settings)

    def stop(self) -> None:
        """Stop the server."""
        logger.info(f"Stopping expense tracker server with {len(self.store)} transactions in memory")
        logging.shutdown()


def signal_handler(signum, frame):
    """Handle shutdown signals."""
    logger.info(f"Received signal {signum}, shutting down...")
    sys.exit(0)


def main():
    """Main entry point."""
    signal.signal(signal.SIGINT, signal_handler)
    signal.signal(signal.SIGTERM, signal_handler)

    server = None
    try:
        server = ExpenseTrackerServer()
        server.start()

    except KeyboardInterrupt:
        logger.info("Received keyboard interrupt, shutting down...")
    except Exception as e:
        logger.error(f"Fatal error: {str(e)}")
        sys.exit(1)
    finally:
        if server is not None:
            server.stop()


if __name__ == "__main__":
    main()
