"""PlacementParser: extract and validate tile placements from raw text.

Finds the last JSON object in the text that matches the placement
schema. Last-wins: a submission that restates itself gets its final
version used. Bad input yields a failed ``ParseResult``, never an
exception.
"""

import json
import re
from dataclasses import dataclass

import jsonschema

from dabble.core.schemas import placement_schema
from dabble.puzzle.board import PlacedTile

# Matches outermost { ... } with up to two levels of nesting
_JSON_OBJECT_RE = re.compile(
    r"\{(?:[^{}]|\{(?:[^{}]|\{[^{}]*\})*\})*\}"
)


@dataclass(frozen=True)
class ParseResult:
    success: bool
    tiles: tuple[PlacedTile, ...]
    error: str | None


class PlacementParser:
    def __init__(self, schema: dict | None = None) -> None:
        self._schema = schema if schema is not None else placement_schema()

    def parse(self, raw_text: str) -> ParseResult:
        candidates = _JSON_OBJECT_RE.findall(raw_text)
        if not candidates:
            return ParseResult(False, (), "No JSON object found in input")

        last_error = None
        best = None
        for candidate in candidates:
            try:
                parsed = json.loads(candidate)
            except json.JSONDecodeError as e:
                last_error = f"JSON parse error: {e}"
                continue
            try:
                jsonschema.validate(parsed, self._schema)
            except jsonschema.ValidationError as e:
                last_error = f"Schema validation: {e.message}"
                continue
            best = parsed

        if best is None:
            return ParseResult(False, (), last_error)

        tiles = tuple(
            PlacedTile(t["row"], t["col"], t["letter"].upper()) for t in best["tiles"]
        )
        return ParseResult(True, tiles, None)
