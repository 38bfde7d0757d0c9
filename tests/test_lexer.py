import pytest

from topicbulk.core.errors import ParseFailure
from topicbulk.core.models import (
    Comment,
    Definition,
    DefinitionWithComment,
    Empty,
    TopicDefinition,
    definition_of,
)
from topicbulk.parsing.lexer import TopicLineLexer, classify


@pytest.mark.parametrize("line", ["", "   ", "\t", " \t  \r"])
def test_blank_lines_are_empty(line):
    assert classify(line) == Empty()


@pytest.mark.parametrize("line,text", [
    ("#", ""),
    ("# note", " note"),
    ("   #indented", "indented"),
    ("#a,b,c # second hash", "a,b,c # second hash"),
    ("# not,a,definition=", " not,a,definition="),
])
def test_comment_keeps_everything_after_first_hash(line, text):
    assert classify(line) == Comment(text)


def test_plain_definition():
    assert classify("topicA,3,2") == Definition(TopicDefinition("topicA", 3, 2, ()))


def test_definition_with_config():
    assert classify("topicA,3,2,cleanup.policy=compact") == Definition(
        TopicDefinition("topicA", 3, 2, (("cleanup.policy", "compact"),))
    )


def test_definition_with_trailing_comment():
    assert classify("topicA,3,2 # trailing note") == DefinitionWithComment(
        TopicDefinition("topicA", 3, 2, ()), " trailing note"
    )


def test_comment_segment_is_not_reparsed():
    kind = classify("adam,9,11#,a=b,c=d")
    assert kind == DefinitionWithComment(TopicDefinition("adam", 9, 11, ()), ",a=b,c=d")


def test_fields_are_trimmed_and_config_order_kept():
    kind = classify("  orders_v1 , 12 ,  3 , retention.ms = 1000 , a=b, a=c  ")
    assert kind == Definition(TopicDefinition(
        "orders_v1", 12, 3, (("retention.ms", "1000"), ("a", "b"), ("a", "c"))
    ))
    # Duplicates survive parsing; only the mapping view collapses them
    assert definition_of(kind).config_overrides() == {"retention.ms": "1000", "a": "c"}


@pytest.mark.parametrize("line,partitions,replication", [
    ("t,-1,+2", -1, 2),
    ("t,2147483647,-2147483648", 2147483647, -2147483648),
    ("t,007,0", 7, 0),
])
def test_signed_32_bit_integers(line, partitions, replication):
    topic = definition_of(classify(line))
    assert (topic.partitions, topic.replication_factor) == (partitions, replication)


@pytest.mark.parametrize("line", [
    "bad name,3,2",          # whitespace in name
    "1topic,3,2",            # leading digit
    "_topic,3,2",            # leading underscore
    "topic.v1,3,2",          # '.' not allowed in names
    "topicA",                # one field
    "topicA,3",              # two fields
    "topicA,3,2,",           # empty config field
    "topicA,,2",             # empty partitions
    "topicA,three,2",
    "topicA,3,2.0",
    "topicA,1_000,2",
    "topicA,3 1,2",
    "topicA,2147483648,1",   # overflow
    "topicA,1,-2147483649",
    "topicA,3,2,retention",  # no '='
    "topicA,3,2,=1",
    "topicA,3,2,retention.ms=",
    "topicA,3,2,cleanup_policy=compact",
    "topicA,3,2,a=b=c",
    "topicA,3,2,a=comp act",
    ",3,2",
])
def test_malformed_lines_fail(line):
    with pytest.raises(ParseFailure) as exc_info:
        classify(line)
    assert exc_info.value.raw_text == line
    assert exc_info.value.line_number is None


def test_parse_failure_is_a_value_error():
    with pytest.raises(ValueError):
        classify("bad name,3,2")


def test_lexer_instances_are_independent_of_history():
    lexer = TopicLineLexer()
    with pytest.raises(ParseFailure):
        lexer.classify("bad name,3,2")
    assert lexer.classify("topicA,3,2") == classify("topicA,3,2")
