"""
JSON parsing and repair for analyzer output.

Even with a response schema, vision models occasionally wrap their answer in
markdown fences, prepend reasoning text or leave a trailing comma. Decoding
starts at the first `{` and ignores whatever follows the object; when that
fails, local repairs run, then json_repair as the last resort.
"""

from __future__ import annotations

import json
import re
from typing import Any, Dict, Iterator, List, Optional, Tuple

from json_repair import repair_json
from loguru import logger

_REASONING_BLOCK = re.compile(r"^\s*<(thinking|thought)>.*?</\1>\s*", re.DOTALL | re.IGNORECASE)
_FENCED_BLOCK = re.compile(r"```(?:json)?\s*([\s\S]*?)\s*```")
_STRING_LITERAL = re.compile(r'"(?:[^"\\]|\\.)*"', re.DOTALL)
_TRAILING_COMMA = re.compile(r",(\s*[}\]])")
_RAW_CONTROLS = {"\n": "\\n", "\r": "\\r", "\t": "\\t"}


class JSONParseError(ValueError):
    """No strategy produced a JSON object. `raw_text` keeps the model output."""

    def __init__(self, message: str, raw_text: Optional[str] = None):
        super().__init__(message)
        self.raw_text = raw_text


class RobustJSONParser:
    """
    Parser that tolerates the usual ways a model decorates its JSON answer.

    Args:
        enable_json_repair: fall back to json_repair when local fixes fail.
    """

    def __init__(self, enable_json_repair: bool = True):
        self.enable_json_repair = enable_json_repair
        self._decoder = json.JSONDecoder()

    def parse(
        self,
        raw_text: str,
        context_name: str = "JSON",
        expected_keys: Optional[List[str]] = None,
    ) -> Dict[str, Any]:
        """
        Parse model output into a dict.

        Args:
            raw_text: raw model output.
            context_name: label used in log and error messages.
            expected_keys: keys whose absence is logged as a warning.

        Returns:
            The parsed object.

        Raises:
            JSONParseError: empty input, non-object JSON, or nothing parseable.
        """
        if not raw_text or not raw_text.strip():
            raise JSONParseError(f"{context_name}: empty response")

        text = self._strip_decorations(raw_text)
        last_error: Optional[json.JSONDecodeError] = None
        for label, candidate in self._candidates(text):
            try:
                data = self._decode(candidate)
            except json.JSONDecodeError as exc:
                last_error = exc
                continue
            logger.debug(f"{context_name} parsed ({label})")
            return self._check_result(data, expected_keys, context_name, raw_text)

        if self.enable_json_repair:
            data = repair_json(text, return_objects=True)
            if isinstance(data, (dict, list)) and data:
                logger.info(f"{context_name} repaired with json_repair")
                return self._check_result(data, expected_keys, context_name, raw_text)

        message = f"{context_name}: could not parse JSON ({last_error})"
        logger.error(message)
        logger.debug(f"raw text head: {raw_text[:500]}")
        raise JSONParseError(message, raw_text=raw_text) from last_error

    def _strip_decorations(self, raw: str) -> str:
        text = _REASONING_BLOCK.sub("", raw.strip())
        fenced = _FENCED_BLOCK.search(text)
        return fenced.group(1).strip() if fenced else text

    def _candidates(self, text: str) -> Iterator[Tuple[str, str]]:
        yield "as is", text
        repaired = self._local_repairs(text)
        if repaired != text:
            yield "local repairs", repaired

    def _decode(self, text: str) -> Any:
        start = text.find("{")
        if start == -1:
            return json.loads(text)
        value, _ = self._decoder.raw_decode(text, start)
        return value

    def _local_repairs(self, text: str) -> str:
        escaped = _STRING_LITERAL.sub(self._escape_raw_controls, text)
        if escaped != text:
            logger.warning("unescaped control characters found in JSON strings, escaped them")
        trimmed = _TRAILING_COMMA.sub(r"\1", escaped)
        if trimmed != escaped:
            logger.warning("trailing commas found in JSON, removed them")
        return trimmed

    @staticmethod
    def _escape_raw_controls(match: "re.Match[str]") -> str:
        literal = match.group(0)
        for char, escape in _RAW_CONTROLS.items():
            literal = literal.replace(char, escape)
        return literal

    def _check_result(
        self,
        data: Any,
        expected_keys: Optional[List[str]],
        context_name: str,
        raw_text: str,
    ) -> Dict[str, Any]:
        if not isinstance(data, dict):
            raise JSONParseError(f"{context_name}: expected a JSON object", raw_text=raw_text)
        missing = [key for key in expected_keys or [] if key not in data]
        if missing:
            logger.warning(f"{context_name} is missing keys: {', '.join(missing)}")
        return data


__all__ = ["RobustJSONParser", "JSONParseError"]
