#!/usr/bin/env python3
"""
TOPICBULK ENGINE - Reconciliation
---------------------------------
Compares the topic definitions of an input file against a snapshot of the
topics already on the cluster and creates the missing ones, one at a time,
in file order. The first creation failure ends the run; topics created
before it stay created.

Author: topicbulk Team
"""

import logging
from typing import Callable, Iterable, List, Optional, Sequence, Set, Tuple

from topicbulk.core.errors import CreationError
from topicbulk.core.models import ConfigPair, ReconcileResult, RunState, TopicDefinition

logger = logging.getLogger("topicbulk.engine")

CreateFn = Callable[[str, int, int, Sequence[ConfigPair]], None]
NumberedDefinition = Tuple[int, TopicDefinition]


class RunNotifier:
    """
    Receives the per-topic events of a run. The default implementation
    ignores everything; the CLI formatter overrides each hook.
    """

    def topic_skipped(self, line_no: int, topic: TopicDefinition) -> None:
        pass

    def topic_would_create(self, line_no: int, topic: TopicDefinition) -> None:
        pass

    def topic_created(self, line_no: int, topic: TopicDefinition) -> None:
        pass

    def topic_failed(self, line_no: int, topic: TopicDefinition,
                     error: CreationError, created_count: int) -> None:
        pass

    def summary(self, created_count: int, dry_run: bool) -> None:
        pass


NullNotifier = RunNotifier


class ReconcileEngine:
    """
    Single-use state machine: NOT_STARTED -> RUNNING -> COMPLETED | ABORTED.
    The existing-topic snapshot is frozen at construction and never refreshed.
    """

    def __init__(self, existing: Iterable[str], create_fn: CreateFn,
                 dry_run: bool = False, notifier: Optional[RunNotifier] = None):
        self.existing = frozenset(existing)
        self.create_fn = create_fn
        self.dry_run = dry_run
        self.notifier = notifier or NullNotifier()
        self.state = RunState.NOT_STARTED

    def run(self, definitions: Iterable[NumberedDefinition]) -> ReconcileResult:
        """Processes every definition in order, stopping at the first failed creation."""
        if self.state is not RunState.NOT_STARTED:
            raise RuntimeError(f"Engine already used (state={self.state.value})")

        self.state = RunState.RUNNING
        result = ReconcileResult(state=self.state)
        seen: Set[str] = set()

        for line_no, topic in definitions:
            if topic.name in seen:
                # The snapshot is not refreshed, so a repeat is attempted again
                logger.warning("Topic %s repeated at line %d", topic.name, line_no)
            seen.add(topic.name)

            if topic.name in self.existing:
                logger.debug("Skipping existing topic %s (line %d)", topic.name, line_no)
                self.notifier.topic_skipped(line_no, topic)
                continue

            if self.dry_run:
                result.created_count += 1
                self.notifier.topic_would_create(line_no, topic)
                continue

            try:
                self.create_fn(topic.name, topic.partitions,
                               topic.replication_factor, topic.additional_config)
            except Exception as e:
                error = self._as_creation_error(e, topic, line_no)
                logger.error("Creation of %s (line %d) failed: %s", topic.name, line_no, error.detail)
                self.state = RunState.ABORTED
                result.state = self.state
                result.failure = error
                self.notifier.topic_failed(line_no, topic, error, result.created_count)
                self.notifier.summary(result.created_count, self.dry_run)
                return result

            result.created_count += 1
            logger.info("Created topic %s (line %d)", topic.name, line_no)
            self.notifier.topic_created(line_no, topic)

        self.state = RunState.COMPLETED
        result.state = self.state
        self.notifier.summary(result.created_count, self.dry_run)
        return result

    def _as_creation_error(self, exc: Exception, topic: TopicDefinition,
                           line_no: int) -> CreationError:
        if isinstance(exc, CreationError):
            exc.line_number = line_no
            return exc
        error = CreationError(topic.name, str(exc) or type(exc).__name__, line_number=line_no)
        error.__cause__ = exc
        return error


def reconcile(definitions: List[NumberedDefinition], existing: Iterable[str],
              create_fn: CreateFn, dry_run: bool,
              notifier: Optional[RunNotifier] = None) -> Tuple[int, RunState]:
    """Runs a fresh engine and returns (created_count, final state)."""
    engine = ReconcileEngine(existing, create_fn, dry_run=dry_run, notifier=notifier)
    result = engine.run(definitions)
    return result.created_count, result.state
