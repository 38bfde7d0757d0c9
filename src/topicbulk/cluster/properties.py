#!/usr/bin/env python3
"""
TOPICBULK PROPERTIES READER
---------------------------
Reads a Java-style .properties file (e.g. a Kafka client.properties) into a
flat string map. Keys are handed to the Kafka client untouched.

Author: topicbulk Team
"""

import logging
from pathlib import Path
from typing import Dict, Union

import javaproperties

from topicbulk.core.errors import InputReadError

logger = logging.getLogger("topicbulk.properties")


def parse_properties(text: str) -> Dict[str, str]:
    """Decodes properties text: comments, continuations and escapes included."""
    return dict(javaproperties.loads(text))


def read_properties(path: Union[str, Path]) -> Dict[str, str]:
    """Loads the broker connection properties. Unreadable files raise InputReadError."""
    try:
        text = Path(path).read_text(encoding='utf-8-sig')
        props = parse_properties(text)
    except (OSError, ValueError) as e:
        # UnicodeDecodeError and malformed \u escapes are both ValueErrors
        raise InputReadError(str(path), str(e)) from e

    logger.debug("Read %d connection properties from %s", len(props), path)
    return props
