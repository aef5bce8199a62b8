"""ai_txt.parser: text (ai.txt) and JSON (ai.json) parsers producing the same document model."""

from ai_txt.parser.json_parser import parse_json
from ai_txt.parser.text_parser import MAX_INPUT_SIZE, parse_text

__all__ = ["parse_text", "parse_json", "MAX_INPUT_SIZE"]
