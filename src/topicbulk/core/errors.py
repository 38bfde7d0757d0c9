#!/usr/bin/env python3
"""
TOPICBULK ERRORS
----------------
Failure taxonomy shared by the loader, the engine, the cluster client and
the CLI. None of these are retried; each one ends the run.

Author: topicbulk Team
"""

from typing import Optional


class TopicBulkError(Exception):
    """Root of every failure the CLI knows how to report."""


class InputReadError(TopicBulkError):
    """An input or properties file could not be opened, read or decoded."""

    def __init__(self, path: str, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Unable to read '{path}': {reason}")


class ParseFailure(TopicBulkError, ValueError):
    """
    A line that matches none of the line kinds.

    Deliberately carries no rule name: the contract is only that this exact
    line could not be classified.
    """

    def __init__(self, raw_text: str, line_number: Optional[int] = None):
        self.raw_text = raw_text
        self.line_number = line_number
        where = f"line {line_number}" if line_number is not None else "line"
        super().__init__(f"Failed to parse {where}: {raw_text!r}")


class SnapshotFetchError(TopicBulkError):
    """The set of existing topic names could not be fetched from the cluster."""

    def __init__(self, detail: str):
        self.detail = detail
        super().__init__(f"Failed to fetch existing topics: {detail}")


class CreationError(TopicBulkError):
    """A single topic creation was rejected by the cluster or timed out."""

    def __init__(self, topic: str, detail: str, error_code: Optional[str] = None,
                 line_number: Optional[int] = None):
        self.topic = topic
        self.detail = detail
        self.error_code = error_code
        self.line_number = line_number
        super().__init__(self._describe())

    def _describe(self) -> str:
        code = f"{self.error_code}: " if self.error_code else ""
        return f"Failed to create topic {self.topic}. {code}{self.detail}"


class ClientConfigError(TopicBulkError):
    """The connection properties were rejected by the Kafka client."""

    def __init__(self, detail: str):
        self.detail = detail
        super().__init__(f"Invalid Kafka client configuration: {detail}")
