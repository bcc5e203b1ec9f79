# ==============================================================================
# INCLUDE PARSER - Relation Path Validation
# ==============================================================================
# Parses the ``include`` query parameter into validated relation paths
# Grammar:
#   include := path (SEPARATOR path)*
#   path    := segment (NESTED_SEPARATOR segment)*
#   segment := [A-Za-z0-9_]*
# ==============================================================================

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, List, Optional, Tuple

from catalog_api.core.constants import ErrorMessages, IncludeConstants
from catalog_api.core.exceptions import ValidationError
from catalog_api.core.settings import settings

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RelationPath:
    """
    One validated relation path such as ``categories.products``.

    Attributes:
        text: The path exactly as requested (trimmed)
        segments: The path split on the nested separator
    """

    text: str
    segments: Tuple[str, ...]

    @property
    def depth(self) -> int:
        """Number of segments in the path."""
        return len(self.segments)

    @property
    def head(self) -> str:
        """First segment."""
        return self.segments[0]

    @property
    def is_nested(self) -> bool:
        return len(self.segments) > 1


class _PathScanner:
    """Single-pass scanner over one path; raises on the first bad character."""

    def __init__(self, text: str, nested_separator: str) -> None:
        self._text = text
        self._separator = nested_separator
        self._pos = 0

    def path(self) -> Tuple[str, ...]:
        segments = [self._segment()]
        while self._accept(self._separator):
            segments.append(self._segment())
        if self._pos != len(self._text):
            raise ValueError(
                f"unexpected character {self._text[self._pos]!r} at {self._pos}"
            )
        return tuple(segments)

    def _segment(self) -> str:
        start = self._pos
        while self._pos < len(self._text) and _is_segment_char(self._text[self._pos]):
            self._pos += 1
        return self._text[start:self._pos]

    def _accept(self, token: str) -> bool:
        if self._text.startswith(token, self._pos):
            self._pos += len(token)
            return True
        return False


def _is_segment_char(char: str) -> bool:
    return char.isascii() and (char.isalnum() or char == "_")


class IncludeParser:
    """
    Validating parser for the ``include`` query parameter.

    Limits default to the application settings and can be overridden
    per instance.

    Segments are ASCII letters, digits and underscores. The nested
    separator is the only other character a path may hold, so with
    ``nested_separator="/"`` a dot is rejected like any other symbol.

    Example:
        >>> IncludeParser().parse("fullPrice, categories.products")
        ['fullPrice', 'categories.products']
        >>> IncludeParser(max_depth=2).parse("a.b.c")
        Traceback (most recent call last):
        ...
        catalog_api.core.exceptions.ValidationError: ...
    """

    def __init__(
        self,
        max_depth: Optional[int] = None,
        max_relations: Optional[int] = None,
        separator: Optional[str] = None,
        nested_separator: Optional[str] = None,
    ) -> None:
        self.max_depth = max_depth if max_depth is not None else settings.INCLUDE_MAX_DEPTH
        self.max_relations = (
            max_relations if max_relations is not None else settings.INCLUDE_MAX_RELATIONS
        )
        self.separator = separator or settings.INCLUDE_SEPARATOR
        self.nested_separator = nested_separator or settings.INCLUDE_NESTED_SEPARATOR

    def parse(self, value: Any) -> Optional[List[str]]:
        """
        Parse and validate a raw ``include`` value.

        Args:
            value: Raw query parameter (any type)

        Returns:
            List of relation path strings in request order, or None
            when no relations were requested

        Raises:
            ValidationError: On forbidden characters, too many relations,
                malformed paths or too deep nesting
        """
        paths = self.parse_paths(value)
        if paths is None:
            return None
        return [path.text for path in paths]

    def parse_paths(self, value: Any) -> Optional[List[RelationPath]]:
        """Same as :meth:`parse` but returns typed :class:`RelationPath` values."""
        if not value or not isinstance(value, str):
            return None

        if IncludeConstants.DANGEROUS_CHARS.search(value):
            raise ValidationError(
                message=ErrorMessages.INVALID_INCLUDE_CHARACTERS,
                errors={"include": value},
            )

        relations = [relation.strip() for relation in value.split(self.separator)]
        relations = [relation for relation in relations if relation]
        if not relations:
            return None

        if len(relations) > self.max_relations:
            raise ValidationError(
                message=ErrorMessages.MAX_RELATIONS_EXCEEDED.format(
                    max_relations=self.max_relations,
                    found=len(relations),
                ),
                errors={"include": relations},
            )

        paths = [self._parse_path(relation) for relation in relations]

        depth = max(path.depth for path in paths)
        if depth > self.max_depth:
            raise ValidationError(
                message=ErrorMessages.MAX_DEPTH_EXCEEDED.format(
                    max_depth=self.max_depth,
                    depth=depth,
                ),
                errors={"include": relations},
            )

        logger.debug(f"Parsed include paths: {relations}")
        return paths

    def _parse_path(self, relation: str) -> RelationPath:
        try:
            segments = _PathScanner(relation, self.nested_separator).path()
        except ValueError as e:
            raise ValidationError(
                message=ErrorMessages.INVALID_RELATION_FORMAT.format(
                    relation=relation,
                    separator=self.nested_separator,
                ),
                errors={"include": relation, "reason": str(e)},
            ) from e
        return RelationPath(text=relation, segments=segments)


def parse_include(
    value: Any,
    max_depth: Optional[int] = None,
    max_relations: Optional[int] = None,
    separator: Optional[str] = None,
    nested_separator: Optional[str] = None,
) -> Optional[List[str]]:
    """
    Parse the ``include`` query parameter with the configured limits.

    Non-string and empty values mean "no relations" and return None.
    """
    parser = IncludeParser(
        max_depth=max_depth,
        max_relations=max_relations,
        separator=separator,
        nested_separator=nested_separator,
    )
    return parser.parse(value)


def split_path(path: str, nested_separator: Optional[str] = None) -> Tuple[str, Optional[str]]:
    """
    Split a relation path into its first segment and the remaining suffix.

    Example:
        >>> split_path("categories.products.images")
        ('categories', 'products.images')
        >>> split_path("fullPrice")
        ('fullPrice', None)
    """
    separator = nested_separator or settings.INCLUDE_NESTED_SEPARATOR
    head, sep, rest = path.partition(separator)
    return head, (rest if sep else None)
