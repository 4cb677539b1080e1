"""
Naming helpers shared by the generators.
"""

import keyword
import re

# Splits text into words on camelCase and acronym boundaries
_WORD_PATTERN = re.compile(r"[A-Z]+(?=[A-Z][a-z])|[A-Z]?[a-z]+|[A-Z]+|[0-9]+")


def _normalize_separators(text: str) -> str:
    """Normalize separators (underscores, hyphens) to spaces."""
    return text.replace("_", " ").replace("-", " ")


def _split_into_words(text: str) -> list[str]:
    return _WORD_PATTERN.findall(text)


def to_snake_case(text: str) -> str:
    """Convert PascalCase, camelCase or UPPER_SNAKE_CASE text to snake_case.

    Examples:
        "Account" -> "account"
        "createdAt" -> "created_at"
        "HTTPRequest" -> "http_request"
        "INACTIVE_LONG" -> "inactive_long"
        "block2Hash" -> "block_2_hash"
    """
    if not text:
        return ""
    words = _split_into_words(_normalize_separators(text))
    return "_".join(word.lower() for word in words)


def escape_keyword(name: str) -> str:
    """Append an underscore to Python keywords (`class` -> `class_`)."""
    return name + "_" if keyword.iskeyword(name) else name


def python_identifier(name: str) -> str:
    """Snake-case a property name and escape Python keywords."""
    return escape_keyword(to_snake_case(name) or name)


def comment_lines(description: str | None, marker: str = "#") -> list[str]:
    """Turn a description into comment lines, one per description line.

    Lines are copied verbatim; nothing is escaped.
    """
    if not description:
        return []
    return [f"{marker} {line}".rstrip() for line in description.split("\n")]
