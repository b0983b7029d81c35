"""Document paths and collection patterns.

A document path alternates collection and document ids
(`users/u1/orders/o1`). A pattern replaces document ids with `{param}`
placeholders (`users/{userId}/orders/{orderId}`) and extracts them on match.
"""

import re

_PLACEHOLDER = re.compile(r"^\{([A-Za-z_][A-Za-z0-9_]*)\}$")


def split_document_path(path: str) -> list[str]:
    """Split and validate a document path.

    Raises:
        ValueError: for empty segments or a path that names a collection
            rather than a document.
    """
    if not isinstance(path, str) or not path.strip("/"):
        raise ValueError(f"Invalid document path: {path!r}")

    segments = path.strip("/").split("/")
    if any(not segment for segment in segments):
        raise ValueError(f"Invalid document path (empty segment): {path!r}")
    if len(segments) % 2 != 0:
        raise ValueError(f"Path does not address a document: {path!r}")
    return segments


def document_id(path: str) -> str:
    return split_document_path(path)[-1]


class DocumentPattern:
    """A document path pattern with `{param}` placeholders."""

    def __init__(self, pattern: str):
        self.pattern = pattern
        self._segments = split_document_path(pattern)

    def match(self, path: str) -> dict[str, str] | None:
        """Return the extracted path parameters, or None when the path doesn't match."""
        segments = split_document_path(path)
        if len(segments) != len(self._segments):
            return None

        params = {}
        for expected, actual in zip(self._segments, segments):
            placeholder = _PLACEHOLDER.match(expected)
            if placeholder:
                params[placeholder.group(1)] = actual
            elif expected != actual:
                return None
        return params

    def __repr__(self) -> str:
        return f"DocumentPattern({self.pattern!r})"
