"""
Tests for transcript mistake highlighting.
"""
from src.models.analysis import Mistake
from src.services.highlight_service import highlight_conversation, highlight_mistakes
from tests.configs import make_result


def _mistake(phrase: str, correction: str = "fixed", explanation: str = "because") -> Mistake:
    return Mistake(incorrectPhrase=phrase, correction=correction, explanation=explanation)


def _texts(spans):
    return [span.text for span in spans]


def test_no_mistakes_returns_single_plain_span():
    text = "Nothing wrong here."
    for mistakes in (None, []):
        spans = highlight_mistakes(text, mistakes)
        assert len(spans) == 1
        assert spans[0].text == text
        assert not spans[0].is_flagged


def test_leading_match_drops_empty_span():
    mistake = _mistake("I seen", "I saw", "past tense")
    spans = highlight_mistakes("I seen him yesterday", [mistake])

    assert _texts(spans) == ["I seen", " him yesterday"]
    assert spans[0].mistake == mistake
    assert not spans[1].is_flagged


def test_match_is_case_insensitive_and_keeps_original_casing():
    mistake = _mistake("i seen")
    spans = highlight_mistakes("Yesterday I SEEN him", [mistake])

    assert _texts(spans) == ["Yesterday ", "I SEEN", " him"]
    assert spans[1].mistake == mistake


def test_every_occurrence_is_flagged():
    spans = highlight_mistakes("he go, she go, they go", [_mistake("go")])

    flagged = [span for span in spans if span.is_flagged]
    assert len(flagged) == 3
    assert "".join(_texts(spans)) == "he go, she go, they go"


def test_phrase_is_matched_literally():
    mistake = _mistake("what's up?")
    text = "Hey, what's up? whats upp"
    spans = highlight_mistakes(text, [mistake])

    assert [span.text for span in spans if span.is_flagged] == ["what's up?"]
    assert "".join(_texts(spans)) == text


def test_metacharacters_do_not_act_as_patterns():
    spans = highlight_mistakes("a.c abc (x) x", [_mistake("a.c"), _mistake("(x)")])

    assert [span.text for span in spans if span.is_flagged] == ["a.c", "(x)"]


def test_first_declared_phrase_wins_at_same_position():
    short = _mistake("I have")
    long = _mistake("I have went")
    spans = highlight_mistakes("I have went home", [short, long])

    assert _texts(spans) == ["I have", " went home"]
    assert spans[0].mistake == short

    spans = highlight_mistakes("I have went home", [long, short])
    assert _texts(spans) == ["I have went", " home"]
    assert spans[0].mistake == long


def test_leftmost_match_wins_over_declaration_order():
    spans = highlight_mistakes("more better and gooder", [_mistake("gooder"), _mistake("more better")])

    assert [span.text for span in spans if span.is_flagged] == ["more better", "gooder"]


def test_duplicate_phrases_use_first_mistake():
    first = _mistake("irregardless", "regardless", "first")
    second = _mistake("Irregardless", "anyway", "second")
    spans = highlight_mistakes("Irregardless of that", [first, second])

    assert spans[0].mistake == first


def test_empty_phrases_never_match():
    text = "Some text"
    spans = highlight_mistakes(text, [_mistake("")])
    assert _texts(spans) == [text]
    assert not spans[0].is_flagged

    spans = highlight_mistakes(text, [_mistake(""), _mistake("text")])
    assert _texts(spans) == ["Some ", "text"]


def test_phrase_not_in_text_leaves_text_plain():
    spans = highlight_mistakes("All good", [_mistake("missing")])

    assert _texts(spans) == ["All good"]
    assert not spans[0].is_flagged


def test_concatenated_spans_reproduce_text():
    text = "Um, I goed to the store and, um, I buyed milk. I GOED home."
    mistakes = [_mistake("I goed"), _mistake("buyed"), _mistake("um")]
    spans = highlight_mistakes(text, mistakes)

    assert "".join(_texts(spans)) == text
    assert all(span.text for span in spans)


def test_highlight_conversation_only_flags_user_turns():
    turns = highlight_conversation(make_result())

    assert [turn.speaker for turn in turns] == ["AI", "User"]
    assert len(turns[0].spans) == 1 and not turns[0].spans[0].is_flagged
    assert turns[1].spans[0].text == "I seen"
    assert turns[1].spans[0].mistake.correction == "I saw"
    assert "".join(span.text for span in turns[1].spans) == turns[1].text
