"""
Domain Service: Response Parser

Parses oracle output into ScoreResult / PartialScore.

Two modes:
- complete: the full response text, strict schema and range validation
- partial: a growing prefix of a streamed response, decoded incrementally
  so that fields appear as soon as their values are final (integers) or
  have started (the comment string, which then keeps growing)
"""

import json
import re
from typing import Any, Dict, Optional, Tuple

from oracle_judge.domain.errors import OracleMalformedResponse
from oracle_judge.domain.judge.entities import ScoreResult, PartialScore, COMMENT_MAX_LENGTH

SCORE_FIELDS = ("concreteness_score", "boldness_score")
COMMENT_FIELD = "ai_comment"

_NUMBER_CHARS = set("-+.eE0123456789")
_WHITESPACE = " \t\r\n"
_LITERALS = {"true": True, "false": False, "null": None}
_SIMPLE_ESCAPES = {
    '"': '"', "\\": "\\", "/": "/", "b": "\b", "f": "\f", "n": "\n", "r": "\r", "t": "\t",
}
_NESTED = object()


class ResponseParser:
    """
    Domain service for parsing oracle responses.

    Scores outside [0, 10] or of the wrong type are protocol violations and
    raise OracleMalformedResponse; they are never clamped.
    """

    def parse_complete(self, response_text: str) -> ScoreResult:
        """
        Parse a complete oracle response.

        Expected format: {"concreteness_score": 0-10, "boldness_score": 0-10, "ai_comment": "..."}

        Raises:
            OracleMalformedResponse: if no JSON object is found, a score is
                missing, not an integer, or out of range
        """
        data = self._extract_json(response_text)
        if not isinstance(data, dict):
            raise OracleMalformedResponse(
                "Oracle response is not a JSON object", raw_text=response_text
            )

        scores = {}
        for name in SCORE_FIELDS:
            if name not in data:
                raise OracleMalformedResponse(f"Oracle response is missing {name}", raw_text=response_text)
            scores[name] = self._coerce_score(name, data[name], response_text)

        comment = self._coerce_comment(data.get(COMMENT_FIELD), response_text)

        return ScoreResult(
            concreteness_score=scores["concreteness_score"],
            boldness_score=scores["boldness_score"],
            commentary=comment or "",
        )

    def parse_partial(self, accumulated_text: str) -> PartialScore:
        """
        Decode whatever fields are already final in a streamed prefix.

        Fields found in a prefix are found in every longer prefix of the
        same text, so successive calls never lose a field.

        Raises:
            OracleMalformedResponse: if a field that is already final has
                the wrong type or an out-of-range score
        """
        found = self._scan_partial_object(accumulated_text)

        values: Dict[str, Any] = {}
        for name in SCORE_FIELDS:
            if name in found:
                values[name] = self._coerce_score(name, found[name], accumulated_text)
        if COMMENT_FIELD in found:
            values["commentary"] = self._coerce_comment(found[COMMENT_FIELD], accumulated_text)

        return PartialScore(**values)

    def _coerce_score(self, name: str, value: Any, raw_text: str) -> int:
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise OracleMalformedResponse(
                f"{name} must be an integer, got {value!r}", raw_text=raw_text
            )
        if isinstance(value, float):
            if not value.is_integer():
                raise OracleMalformedResponse(
                    f"{name} must be an integer, got {value!r}", raw_text=raw_text
                )
            value = int(value)
        if not 0 <= value <= 10:
            raise OracleMalformedResponse(
                f"{name} must be in [0, 10], got {value}", raw_text=raw_text
            )
        return value

    def _coerce_comment(self, value: Any, raw_text: str) -> Optional[str]:
        if value is None:
            return None
        if not isinstance(value, str):
            raise OracleMalformedResponse(
                f"{COMMENT_FIELD} must be a string, got {type(value).__name__}", raw_text=raw_text
            )
        return value[:COMMENT_MAX_LENGTH]

    def _extract_json(self, text: str) -> Optional[Any]:
        """
        Extract JSON from text, handling common formatting issues.

        Tries multiple strategies to find and parse JSON.
        """
        # Strategy 1: Direct JSON parse
        try:
            return json.loads(text.strip())
        except json.JSONDecodeError:
            pass

        # Strategy 2: Markdown code fence
        fence = re.search(r"```(?:json)?\s*(.*?)```", text, re.DOTALL)
        if fence:
            try:
                return json.loads(fence.group(1).strip())
            except json.JSONDecodeError:
                pass

        # Strategy 3: Find JSON between curly braces
        match = re.search(r'\{[^{}]*\}', text, re.DOTALL)
        if match:
            try:
                return json.loads(match.group(0))
            except json.JSONDecodeError:
                pass

        return None

    def _scan_partial_object(self, text: str) -> Dict[str, Any]:
        """
        Scan the first JSON object in a possibly truncated text.

        Returns the members whose values are already final, plus a string
        member whose closing quote has not arrived yet (decoded so far).
        Scanning stops at the first incomplete token.
        """
        found: Dict[str, Any] = {}
        i = text.find("{")
        if i < 0:
            return found
        i += 1
        n = len(text)

        while True:
            i = self._skip_ws(text, i)
            if i >= n or text[i] == "}":
                return found
            if text[i] != '"':
                return found
            key, i, closed = self._read_string(text, i + 1)
            if not closed:
                return found
            i = self._skip_ws(text, i)
            if i >= n or text[i] != ":":
                return found
            i = self._skip_ws(text, i + 1)
            if i >= n:
                return found

            ch = text[i]
            if ch == '"':
                value, i, closed = self._read_string(text, i + 1)
                found[key] = value
                if not closed:
                    return found
            elif ch in _NUMBER_CHARS:
                start = i
                while i < n and text[i] in _NUMBER_CHARS:
                    i += 1
                if i >= n:
                    # digits may still follow
                    return found
                try:
                    found[key] = json.loads(text[start:i])
                except json.JSONDecodeError:
                    found[key] = text[start:i]
            elif ch in "tfn":
                literal = next((lit for lit in _LITERALS if text.startswith(lit, i)), None)
                if literal is None:
                    return found
                found[key] = _LITERALS[literal]
                i += len(literal)
            elif ch in "[{":
                i = self._skip_nested(text, i)
                if i < 0:
                    return found
                found[key] = _NESTED
            else:
                return found

            i = self._skip_ws(text, i)
            if i >= n:
                return found
            if text[i] == ",":
                i += 1
            elif text[i] == "}":
                return found
            else:
                return found

    @staticmethod
    def _skip_ws(text: str, i: int) -> int:
        while i < len(text) and text[i] in _WHITESPACE:
            i += 1
        return i

    @classmethod
    def _read_string(cls, text: str, i: int) -> Tuple[str, int, bool]:
        """
        Decode a JSON string starting after its opening quote.

        Returns (decoded, index after the string, closed). A trailing
        escape sequence that is not complete yet is left out.
        """
        out = []
        n = len(text)
        while i < n:
            ch = text[i]
            if ch == '"':
                return "".join(out), i + 1, True
            if ch == "\\":
                if i + 1 >= n:
                    break
                esc = text[i + 1]
                if esc == "u":
                    decoded, consumed = cls._read_unicode_escape(text, i)
                    if decoded is None:
                        break
                    out.append(decoded)
                    i += consumed
                    continue
                out.append(_SIMPLE_ESCAPES.get(esc, esc))
                i += 2
                continue
            out.append(ch)
            i += 1
        return "".join(out), n, False

    @staticmethod
    def _read_unicode_escape(text: str, i: int) -> Tuple[Optional[str], int]:
        """
        Decode the \\uXXXX escape at text[i], joining a UTF-16 surrogate pair
        into one character as json.loads does.

        Returns (decoded, characters consumed), or (None, 0) while the escape
        or the low half of a pair is still incomplete.
        """
        hex_digits = text[i + 2:i + 6]
        if len(hex_digits) < 4:
            return None, 0
        try:
            code = int(hex_digits, 16)
        except ValueError:
            return hex_digits, 6
        if not 0xD800 <= code <= 0xDBFF:
            return chr(code), 6

        low = text[i + 6:i + 12]
        if len(low) < 6 and ("\\u".startswith(low) or low.startswith("\\u")):
            return None, 0
        if low.startswith("\\u"):
            try:
                low_code = int(low[2:], 16)
            except ValueError:
                low_code = None
            if low_code is not None and 0xDC00 <= low_code <= 0xDFFF:
                return chr(0x10000 + ((code - 0xD800) << 10) + (low_code - 0xDC00)), 12
        return chr(code), 6

    @classmethod
    def _skip_nested(cls, text: str, i: int) -> int:
        """Skip a nested array/object; -1 if it is not closed yet."""
        depth = 0
        n = len(text)
        while i < n:
            ch = text[i]
            if ch == '"':
                _, i, closed = cls._read_string(text, i + 1)
                if not closed:
                    return -1
                continue
            if ch in "[{":
                depth += 1
            elif ch in "]}":
                depth -= 1
                if depth == 0:
                    return i + 1
            i += 1
        return -1
