#!/usr/bin/env python3
"""
TOPICBULK CORE MODELS
---------------------
Defines the fundamental data structures used across the topicbulk engine.
A LineKind is produced once per physical line of the topic input file and
never mutated afterwards.

Author: topicbulk Team
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Optional, Tuple

ConfigPair = Tuple[str, str]


@dataclass(frozen=True)
class TopicDefinition:
    """
    A Kafka topic the input file asks to exist.

    The additional config pairs keep file order and are never de-duplicated,
    e.g. (("cleanup.policy", "compact"), ("retention.ms", "1000")).
    """
    name: str                  # Topic name, [A-Za-z][A-Za-z0-9_-]*
    partitions: int            # Signed 32-bit partition count
    replication_factor: int    # Signed 32-bit replication factor
    additional_config: Tuple[ConfigPair, ...] = ()

    def config_overrides(self) -> Dict[str, str]:
        """Collapses the pairs into a mapping; a repeated key keeps its last value."""
        return dict(self.additional_config)


class LineKind:
    """Base of the four line kinds a raw input line can classify as."""


@dataclass(frozen=True)
class Empty(LineKind):
    """Blank (or whitespace only) line."""


@dataclass(frozen=True)
class Comment(LineKind):
    text: str  # Everything after the first '#', possibly empty


@dataclass(frozen=True)
class Definition(LineKind):
    topic: TopicDefinition


@dataclass(frozen=True)
class DefinitionWithComment(LineKind):
    topic: TopicDefinition
    text: str  # Inline comment segment, verbatim


def definition_of(kind: LineKind) -> Optional[TopicDefinition]:
    """Returns the topic carried by a definition line, None for Empty/Comment."""
    if isinstance(kind, (Definition, DefinitionWithComment)):
        return kind.topic
    return None


class RunState(Enum):
    NOT_STARTED = "NOT_STARTED"
    RUNNING = "RUNNING"
    COMPLETED = "COMPLETED"
    ABORTED = "ABORTED"


@dataclass
class ReconcileResult:
    """Outcome of one reconciliation run."""
    created_count: int = 0
    state: RunState = RunState.NOT_STARTED
    failure: Optional[Exception] = field(default=None)

    @property
    def ok(self) -> bool:
        return self.state is RunState.COMPLETED
