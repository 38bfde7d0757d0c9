#!/usr/bin/env python3
"""
TOPICBULK CLI - Bulk Kafka Topic Creation
-----------------------------------------
Primary interface: loads a topic input file, fetches the topics already on
the cluster and creates the missing ones in file order.

    topicbulk -f topics.txt -c client.properties [--test]

Exit code is 0 for a completed run (dry runs included), 1 for any failure.

Author: topicbulk Team
"""

import sys
import logging
import argparse
from typing import Callable, List, Optional

from topicbulk.cli.formatter import TopicFormatter, console
from topicbulk.cluster.admin import DEFAULT_TIMEOUT, ClusterAdmin
from topicbulk.core.engine import ReconcileEngine
from topicbulk.core.errors import InputReadError, ParseFailure, TopicBulkError
from topicbulk.parsing.loader import InputLoader

VERSION = "0.1.0"

logger = logging.getLogger("topicbulk.cli")

AdminFactory = Callable[[str, float], ClusterAdmin]


def _default_admin_factory(conf_path: str, timeout: float) -> ClusterAdmin:
    return ClusterAdmin.from_properties(conf_path, timeout=timeout)


class TopicBulkCLI:
    """
    CLI wrapper that turns flags into a single reconciliation run.
    The admin factory is injectable so runs can be driven without a broker.
    """

    def __init__(self, admin_factory: Optional[AdminFactory] = None,
                 formatter: Optional[TopicFormatter] = None):
        self.admin_factory = admin_factory or _default_admin_factory
        self.formatter = formatter or TopicFormatter()
        self.parser = argparse.ArgumentParser(
            prog="topicbulk",
            description="Bulk create Kafka topics from an input file",
        )
        self._setup_args()

    def _setup_args(self):
        """Configures the command-line flags."""
        self.parser.add_argument("--version", action="version", version=f"topicbulk {VERSION}")
        self.parser.add_argument("-f", "--file", required=True, help="Topic input file")
        self.parser.add_argument("-c", "--conf", required=True,
                                 help="Kafka client connection properties file")
        self.parser.add_argument("-t", "--test", action="store_true",
                                 help="Test mode. Print topics that would be created without creating them")
        self.parser.add_argument("--timeout", type=float, default=DEFAULT_TIMEOUT,
                                 help=f"Per-request timeout in seconds (default: {DEFAULT_TIMEOUT})")
        self.parser.add_argument("--verbose", action="store_true", help="Enable debug logging")

    def _execute(self, args: argparse.Namespace) -> int:
        """Load -> snapshot -> reconcile. Every stage failure ends the run with 1."""
        # Phase 1: the whole input file must parse before anything touches the cluster
        try:
            definitions = InputLoader().load_definitions(args.file)
        except ParseFailure as e:
            self.formatter.error(f"Failed to parse line {e.line_number}: {e.raw_text}")
            return 1
        except InputReadError as e:
            self.formatter.error(str(e))
            return 1

        # Phase 2: existing-topic snapshot, taken once
        try:
            admin = self.admin_factory(args.conf, args.timeout)
            existing = admin.fetch_existing_topic_names()
        except TopicBulkError as e:
            self.formatter.error(str(e))
            return 1

        # Phase 3: reconciliation
        engine = ReconcileEngine(
            existing,
            admin.create_topic,
            dry_run=args.test,
            notifier=self.formatter,
        )
        result = engine.run(definitions)
        return 0 if result.ok else 1

    def run(self, argv: Optional[List[str]] = None) -> int:
        """Primary routing entry point."""
        args = self.parser.parse_args(argv)
        logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)

        self.formatter.print_header("Dry Run" if args.test else "Bulk Topic Create", VERSION)
        logger.debug("Input file: %s, conf file: %s, test mode: %s", args.file, args.conf, args.test)
        return self._execute(args)


def main(argv: Optional[List[str]] = None) -> int:
    """Application entry point with interrupt handling."""
    try:
        return TopicBulkCLI().run(argv)
    except KeyboardInterrupt:
        console.print("\n[bold red]Terminated by user.[/bold red]")
        return 1


if __name__ == "__main__":
    sys.exit(main())
