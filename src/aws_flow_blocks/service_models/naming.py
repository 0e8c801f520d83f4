"""Display names and short descriptions derived from AWS model identifiers."""

from __future__ import annotations

import html
import re

_LOWER_UPPER = re.compile(r"([a-z0-9])([A-Z])")
_ACRONYM_WORD = re.compile(r"([A-Z])([A-Z][a-z])")
_TAG = re.compile(r"<[^>]+>")
_WHITESPACE = re.compile(r"\s+")
_SENTENCE_END = re.compile(r"(?<=[.!?])\s+(?=[A-Z\[(\"])")


def humanize(identifier: str) -> str:
    """Split a PascalCase identifier into words.

    >>> humanize("DescribeStackInstance")
    'Describe Stack Instance'
    >>> humanize("CreateWebACL")
    'Create Web ACL'
    >>> humanize("ListObjectsV2")
    'List Objects V2'
    """
    words = _LOWER_UPPER.sub(r"\1 \2", identifier)
    return _ACRONYM_WORD.sub(r"\1 \2", words)


def lower_camel(identifier: str) -> str:
    """``DescribeDBProxies -> describeDBProxies``."""
    if not identifier:
        return identifier
    return identifier[0].lower() + identifier[1:]


def summarize_documentation(documentation: str | None) -> str:
    """Return the first sentence of an HTML documentation string as plain text."""
    if not documentation:
        return ""
    text = _TAG.sub(" ", documentation)
    text = _WHITESPACE.sub(" ", html.unescape(text)).strip()
    if not text:
        return ""
    return _SENTENCE_END.split(text, maxsplit=1)[0]
