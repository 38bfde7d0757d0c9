#!/usr/bin/env python3
"""
TOPICBULK LEXER - Line Classifier
---------------------------------
Turns one raw line of a topic input file into exactly one LineKind:

    <blank>                                              -> Empty
    # <any text>                                         -> Comment
    <name>,<partitions>,<replication>[,<k>=<v>]* [# ..]  -> Definition(WithComment)

Every line is classified on its own, without context from its neighbours,
so a failure can always be pinned to one exact line.

Author: topicbulk Team
"""

import logging
import re
from typing import List, Optional, Tuple

from topicbulk.core.errors import ParseFailure
from topicbulk.core.models import (
    Comment,
    ConfigPair,
    Definition,
    DefinitionWithComment,
    Empty,
    LineKind,
    TopicDefinition,
)

logger = logging.getLogger("topicbulk.lexer")

NAME_PATTERN = re.compile(r"[A-Za-z][A-Za-z0-9_-]*")
INT32_PATTERN = re.compile(r"[+-]?[0-9]+")
CONFIG_KEY_PATTERN = re.compile(r"[A-Za-z0-9.]+")
CONFIG_VALUE_PATTERN = re.compile(r"[A-Za-z0-9]+")

INT32_MIN = -(2 ** 31)
INT32_MAX = 2 ** 31 - 1


class TopicLineLexer:
    """
    Stateless recognizer for the topic input grammar.
    Each private helper owns one grammar rule and raises ParseFailure on violation.
    """

    def _split_comment(self, text: str) -> Tuple[str, Optional[str]]:
        """Splits on the first '#'. The comment part is returned verbatim."""
        data, sep, comment = text.partition('#')
        return data, (comment if sep else None)

    def _parse_name(self, field: str, raw_line: str) -> str:
        if not NAME_PATTERN.fullmatch(field):
            logger.debug("Rejected topic name %r", field)
            raise ParseFailure(raw_line)
        return field

    def _parse_int32(self, field: str, raw_line: str) -> int:
        # int() alone would accept '1_000', inner whitespace and non-ASCII digits
        if not INT32_PATTERN.fullmatch(field):
            logger.debug("Rejected integer field %r", field)
            raise ParseFailure(raw_line)
        value = int(field)
        if not INT32_MIN <= value <= INT32_MAX:
            logger.debug("Integer field %r overflows 32 bits", field)
            raise ParseFailure(raw_line)
        return value

    def _parse_pair(self, field: str, raw_line: str) -> ConfigPair:
        key, sep, value = field.partition('=')
        key, value = key.strip(), value.strip()
        if not sep or not CONFIG_KEY_PATTERN.fullmatch(key) or not CONFIG_VALUE_PATTERN.fullmatch(value):
            logger.debug("Rejected config pair %r", field)
            raise ParseFailure(raw_line)
        return key, value

    def classify(self, raw_line: str) -> LineKind:
        """
        Classifies a single raw line.
        Raises ParseFailure (without a line number) if the line fits no line kind.
        """
        # 1. Blank lines
        trimmed = raw_line.strip()
        if not trimmed:
            return Empty()

        # 2. Whole-line comments are never parsed any further
        if trimmed.startswith('#'):
            return Comment(trimmed[1:])

        # 3. Trailing comment separation
        data, comment = self._split_comment(trimmed)

        # 4. Field split
        fields: List[str] = [f.strip() for f in data.split(',')]
        if len(fields) < 3:
            logger.debug("Expected at least 3 fields, found %d", len(fields))
            raise ParseFailure(raw_line)

        # 5-7. Per-field rules
        topic = TopicDefinition(
            name=self._parse_name(fields[0], raw_line),
            partitions=self._parse_int32(fields[1], raw_line),
            replication_factor=self._parse_int32(fields[2], raw_line),
            additional_config=tuple(self._parse_pair(f, raw_line) for f in fields[3:]),
        )

        # 8. Result construction
        if comment is None:
            return Definition(topic)
        return DefinitionWithComment(topic, comment)


_default_lexer = TopicLineLexer()


def classify(raw_line: str) -> LineKind:
    """Module-level shortcut for TopicLineLexer().classify()."""
    return _default_lexer.classify(raw_line)
