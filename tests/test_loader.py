import pytest

from topicbulk.core.errors import InputReadError, ParseFailure
from topicbulk.core.models import Comment, Definition, Empty, TopicDefinition
from topicbulk.parsing.loader import InputLoader, definitions_from, load, load_definitions
from topicbulk.parsing.lexer import TopicLineLexer


SAMPLE = (
    "# orders domain\n"
    "orders,12,3,cleanup.policy=compact\n"
    "\n"
    "payments,6,3 # owned by payments\n"
    "audit-log,1,3\n"
)


def _write(tmp_path, text, name="topics.txt"):
    path = tmp_path / name
    path.write_text(text, encoding="utf-8")
    return path


def test_load_numbers_lines_from_one(tmp_path):
    lines = load(_write(tmp_path, SAMPLE))

    assert [n for n, _ in lines] == [1, 2, 3, 4, 5]
    assert lines[0] == (1, Comment(" orders domain"))
    assert lines[2] == (3, Empty())
    assert lines[4] == (5, Definition(TopicDefinition("audit-log", 1, 3, ())))


def test_load_definitions_filters_to_topics_in_order(tmp_path):
    definitions = load_definitions(_write(tmp_path, SAMPLE))

    assert [(n, t.name) for n, t in definitions] == [(2, "orders"), (4, "payments"), (5, "audit-log")]
    assert definitions[0][1].additional_config == (("cleanup.policy", "compact"),)


def test_crlf_and_bom_are_tolerated(tmp_path):
    path = tmp_path / "win.txt"
    path.write_bytes("\ufefftopicA,1,1\r\n\r\ntopicB,2,2\r\n".encode("utf-8"))

    assert [(n, t.name) for n, t in load_definitions(path)] == [(1, "topicA"), (3, "topicB")]


def test_empty_file_loads_nothing(tmp_path):
    assert load(_write(tmp_path, "")) == []


def test_first_bad_line_aborts_with_its_number(tmp_path):
    path = _write(tmp_path, "topicA,1,1\n# fine\nbad name,3,2\nalso bad\n")

    with pytest.raises(ParseFailure) as exc_info:
        load(path)

    assert exc_info.value.line_number == 3
    assert exc_info.value.raw_text == "bad name,3,2"


def test_lines_after_failure_are_never_classified(tmp_path):
    seen = []

    class RecordingLexer(TopicLineLexer):
        def classify(self, raw_line):
            seen.append(raw_line)
            return super().classify(raw_line)

    path = _write(tmp_path, "topicA,1,1\n1bad,1,1\ntopicB,1,1\n")
    with pytest.raises(ParseFailure):
        InputLoader(RecordingLexer()).load(path)

    assert seen == ["topicA,1,1", "1bad,1,1"]


def test_missing_file_is_an_input_read_error(tmp_path):
    with pytest.raises(InputReadError) as exc_info:
        load(tmp_path / "nope.txt")
    assert exc_info.value.path.endswith("nope.txt")


def test_undecodable_file_is_an_input_read_error(tmp_path):
    path = tmp_path / "binary.txt"
    path.write_bytes(b"\xff\xfe\xfa topic")

    with pytest.raises(InputReadError):
        load(path)


def test_definitions_from_drops_trivial_lines():
    topic = TopicDefinition("t", 1, 1, ())
    lines = [(1, Empty()), (2, Comment("x")), (3, Definition(topic))]
    assert definitions_from(lines) == [(3, topic)]
