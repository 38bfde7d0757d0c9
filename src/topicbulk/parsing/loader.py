#!/usr/bin/env python3
"""
TOPICBULK INPUT LOADER
----------------------
Reads a topic input file and classifies every physical line in order.
The file must classify in its entirety: the first bad line aborts the load
and nothing after it is classified.

Author: topicbulk Team
"""

import logging
from pathlib import Path
from typing import List, Optional, Tuple, Union

from topicbulk.core.errors import InputReadError, ParseFailure
from topicbulk.core.models import LineKind, TopicDefinition, definition_of
from topicbulk.parsing.lexer import TopicLineLexer

logger = logging.getLogger("topicbulk.loader")

NumberedLine = Tuple[int, LineKind]
NumberedDefinition = Tuple[int, TopicDefinition]


class InputLoader:
    """Drives the lexer over a whole file with 1-based line numbering."""

    def __init__(self, lexer: Optional[TopicLineLexer] = None):
        self.lexer = lexer or TopicLineLexer()

    def _read_lines(self, path: Union[str, Path]) -> List[str]:
        # Everything is read up front so I/O errors surface before classification
        try:
            text = Path(path).read_text(encoding='utf-8-sig')
        except (OSError, UnicodeDecodeError) as e:
            raise InputReadError(str(path), str(e)) from e
        # Only '\n' (optionally preceded by '\r') ends a line; str.splitlines()
        # would also break on form feeds and other separators
        lines = text.split('\n')
        if lines and lines[-1] == "":
            lines.pop()
        return [line[:-1] if line.endswith('\r') else line for line in lines]

    def load(self, path: Union[str, Path]) -> List[NumberedLine]:
        """Returns (line_number, LineKind) for every line of the file."""
        lines = self._read_lines(path)
        result: List[NumberedLine] = []

        for line_no, raw_line in enumerate(lines, start=1):
            try:
                result.append((line_no, self.lexer.classify(raw_line)))
            except ParseFailure as e:
                logger.debug("Load of %s aborted at line %d", path, line_no)
                raise ParseFailure(raw_line, line_number=line_no) from e

        logger.info("Loaded %d lines from %s", len(result), path)
        return result

    def load_definitions(self, path: Union[str, Path]) -> List[NumberedDefinition]:
        """Like load(), keeping only definition lines as (line_number, TopicDefinition)."""
        return definitions_from(self.load(path))


def definitions_from(lines: List[NumberedLine]) -> List[NumberedDefinition]:
    """Drops Empty/Comment lines, keeping file order."""
    definitions = []
    for line_no, kind in lines:
        topic = definition_of(kind)
        if topic is not None:
            definitions.append((line_no, topic))
    return definitions


def load(path: Union[str, Path]) -> List[NumberedLine]:
    return InputLoader().load(path)


def load_definitions(path: Union[str, Path]) -> List[NumberedDefinition]:
    return InputLoader().load_definitions(path)
