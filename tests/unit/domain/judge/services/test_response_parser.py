"""
Unit tests for ResponseParser

Complete parsing with strict validation, and incremental decoding of
streamed prefixes.
"""

import pytest

from oracle_judge.domain.errors import OracleMalformedResponse
from oracle_judge.domain.judge.entities import ScoreResult, PartialScore
from oracle_judge.domain.judge.services import ResponseParser


@pytest.fixture
def parser():
    return ResponseParser()


class TestParseComplete:
    """Test parsing of a full oracle response"""

    def test_plain_json(self, parser, verdict_text):
        result = parser.parse_complete(verdict_text)
        assert result == ScoreResult(8, 6, "Bold call on Bitcoin.")

    def test_code_fence(self, parser):
        text = '```json\n{"concreteness_score": 3, "boldness_score": 2, "ai_comment": "Meh."}\n```'
        assert parser.parse_complete(text) == ScoreResult(3, 2, "Meh.")

    def test_json_inside_prose(self, parser):
        text = 'Here is my verdict: {"concreteness_score": 9, "boldness_score": 7, "ai_comment": "Nice."} Enjoy!'
        assert parser.parse_complete(text) == ScoreResult(9, 7, "Nice.")

    def test_integral_float_accepted(self, parser):
        text = '{"concreteness_score": 7.0, "boldness_score": 2, "ai_comment": ""}'
        assert parser.parse_complete(text).concreteness_score == 7

    def test_missing_comment_defaults_to_empty(self, parser):
        text = '{"concreteness_score": 7, "boldness_score": 2}'
        assert parser.parse_complete(text).commentary == ""

    def test_long_comment_truncated(self, parser):
        text = '{"concreteness_score": 7, "boldness_score": 2, "ai_comment": "%s"}' % ("a" * 400)
        assert len(parser.parse_complete(text).commentary) == 280

    def test_out_of_range_score(self, parser):
        """Test a score of 15 is a protocol violation, never clamped"""
        text = '{"concreteness_score": 15, "boldness_score": 2, "ai_comment": "x"}'
        with pytest.raises(OracleMalformedResponse) as exc_info:
            parser.parse_complete(text)
        assert exc_info.value.raw_text == text

    @pytest.mark.parametrize("value", ['"7"', "7.5", "true", "null", "[7]"])
    def test_wrong_score_type(self, parser, value):
        text = '{"concreteness_score": %s, "boldness_score": 2, "ai_comment": "x"}' % value
        with pytest.raises(OracleMalformedResponse):
            parser.parse_complete(text)

    def test_missing_score(self, parser):
        with pytest.raises(OracleMalformedResponse, match="boldness_score"):
            parser.parse_complete('{"concreteness_score": 5, "ai_comment": "x"}')

    def test_non_string_comment(self, parser):
        with pytest.raises(OracleMalformedResponse):
            parser.parse_complete('{"concreteness_score": 5, "boldness_score": 5, "ai_comment": 42}')

    @pytest.mark.parametrize("text", ["", "I refuse to answer.", "[1, 2]", '{"concreteness_score": 5'])
    def test_not_a_json_object(self, parser, text):
        with pytest.raises(OracleMalformedResponse):
            parser.parse_complete(text)


class TestParsePartial:
    """Test incremental decoding of a streamed prefix"""

    def test_empty_prefix(self, parser):
        assert parser.parse_partial("").is_empty
        assert parser.parse_partial("```json\n").is_empty

    def test_unterminated_integer_is_absent(self, parser):
        """Test an integer only counts once a following character ends it"""
        assert parser.parse_partial('{"concreteness_score": 1').is_empty
        partial = parser.parse_partial('{"concreteness_score": 10,')
        assert partial == PartialScore(concreteness_score=10)

    def test_comment_appears_when_string_opens(self, parser):
        text = '{"concreteness_score": 8, "boldness_score": 6, "ai_comment": "'
        partial = parser.parse_partial(text)
        assert partial.commentary == ""
        assert partial.is_complete

    def test_comment_grows(self, parser):
        text = '{"concreteness_score": 8, "boldness_score": 6, "ai_comment": "Bold ca'
        assert parser.parse_partial(text).commentary == "Bold ca"

    def test_monotonic_over_every_prefix(self, parser, verdict_text):
        """Test no field is lost and no value changes as the prefix grows"""
        final = parser.parse_complete(verdict_text)
        previous = PartialScore()
        for end in range(len(verdict_text) + 1):
            partial = parser.parse_partial(verdict_text[:end])
            assert partial.covers(previous), verdict_text[:end]
            if partial.concreteness_score is not None:
                assert partial.concreteness_score == final.concreteness_score
            if partial.boldness_score is not None:
                assert partial.boldness_score == final.boldness_score
            if partial.commentary is not None:
                assert final.commentary.startswith(partial.commentary)
            previous = partial
        assert previous == PartialScore.from_score_result(final)

    def test_fields_in_any_order(self, parser):
        text = '{"ai_comment": "First!", "boldness_score": 2, "concreteness_score": 5}'
        assert parser.parse_partial(text) == PartialScore(5, 2, "First!")

    def test_escapes(self, parser):
        text = '{"ai_comment": "He said \\"no\\" \\u00e9\\n'
        assert parser.parse_partial(text).commentary == 'He said "no" é\n'

    def test_incomplete_escape_left_out(self, parser):
        assert parser.parse_partial('{"ai_comment": "abc\\').commentary == "abc"
        assert parser.parse_partial('{"ai_comment": "abc\\u00').commentary == "abc"

    def test_surrogate_pair_joined(self, parser):
        """Test an escaped astral character decodes the same as the final parse"""
        text = '{"concreteness_score": 8, "boldness_score": 6, "ai_comment": "Lift off \\ud83d\\ude80 soon"}'
        final = parser.parse_complete(text)

        assert parser.parse_partial(text[:-1]).commentary == "Lift off \U0001F680 soon"
        assert final.commentary == "Lift off \U0001F680 soon"
        for end in range(text.index("\\ud83d"), text.index(" soon")):
            commentary = parser.parse_partial(text[:end]).commentary
            assert final.commentary.startswith(commentary), text[:end]

    def test_high_surrogate_waits_for_low_half(self, parser):
        assert parser.parse_partial('{"ai_comment": "Go \\ud83d').commentary == "Go "
        assert parser.parse_partial('{"ai_comment": "Go \\ud83d\\ude').commentary == "Go "

    def test_lone_surrogate_kept(self, parser):
        assert parser.parse_partial('{"ai_comment": "Go \\ud83d!').commentary == "Go \ud83d!"

    def test_unknown_members_skipped(self, parser):
        text = '{"reasoning": {"notes": ["a", "}"]}, "flag": true, "concreteness_score": 4, '
        assert parser.parse_partial(text) == PartialScore(concreteness_score=4)

    def test_unclosed_nested_member_stops_scan(self, parser):
        assert parser.parse_partial('{"reasoning": {"notes": [1, 2').is_empty

    def test_out_of_range_partial_score(self, parser):
        with pytest.raises(OracleMalformedResponse):
            parser.parse_partial('{"concreteness_score": 15,')

    def test_wrong_type_partial_score(self, parser):
        with pytest.raises(OracleMalformedResponse):
            parser.parse_partial('{"boldness_score": "high",')
