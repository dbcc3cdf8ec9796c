"""
Security sanitization advisor.

Walks every string value of a document (recursively through objects and
arrays) and reports content that is unsafe to render or follow:

- markup and script blocks in text values
- 'javascript:' fragments and inline event handlers
- URI values whose scheme is not allow-listed ('javascript:',
  'vbscript:', 'data:', or anything else outside the configured list);
  a string is a URI value when it sits in a URL field or is a well-formed
  hierarchical or data URI

Findings are advisory and never affect validity. When asked to sanitize,
the advisor returns a deep copy with offending substrings stripped and
disallowed URIs removed: the key is dropped for object members, the
element is dropped for array members. The caller's document is never
mutated.
"""

from __future__ import annotations

import logging
import re
from typing import Any, List, Mapping, Optional

from curator.app.checks import sanitizer as primitives
from curator.app.config import CuratorConfig
from curator.app.schemas.findings import (
    SecurityFindingKind,
    SecuritySeverity,
    SecurityWarning,
)
from curator.app.schemas.validation_result import SecurityReport

logger = logging.getLogger(__name__)


# Fields whose string values are URIs
URL_FIELDS = frozenset(
    {
        "url",
        "image",
        "logo",
        "sameAs",
        "mainEntityOfPage",
        "contentUrl",
        "embedUrl",
        "thumbnailUrl",
        "downloadUrl",
        "installUrl",
        "updateUrl",
        "hasMap",
        "@id",
        "screenshot",
        "license",
    }
)

# Schemes that are never allowed in a URI value
_EXECUTABLE_SCHEMES = {
    "javascript": (SecurityFindingKind.SCRIPT_PROTOCOL, SecuritySeverity.HIGH),
    "vbscript": (SecurityFindingKind.SCRIPT_PROTOCOL, SecuritySeverity.HIGH),
    "data": (SecurityFindingKind.DATA_URI, SecuritySeverity.MEDIUM),
}

_SCHEME_NAMES = {"javascript": "JavaScript", "vbscript": "VBScript"}

_SCHEME = re.compile(r"^([A-Za-z][A-Za-z0-9+.\-]*):")
_HIERARCHICAL = re.compile(r"^[A-Za-z][A-Za-z0-9+.\-]*://")

# data:[<mediatype>][;param][;base64],<data>
_DATA_URI = re.compile(
    r"^data:(?:[\w.+\-]+/[\w.+\-]+)?(?:;[\w.+\-]+(?:=[\w.+\-]*)?)*,",
    re.IGNORECASE,
)

# Browsers ignore control characters and whitespace inside a scheme
_SCHEME_NOISE = re.compile(r"[\x00-\x20]")

_DROP = object()


class _Inspector:
    def __init__(self, config: CuratorConfig) -> None:
        self._config = config
        self.warnings: List[SecurityWarning] = []

    def _flag(
        self,
        path: str,
        message: str,
        kind: SecurityFindingKind,
        severity: SecuritySeverity,
    ) -> None:
        self.warnings.append(
            SecurityWarning(field=path, message=message, severity=severity, kind=kind)
        )

    # ------------------------------------------------------------------
    # Traversal
    # ------------------------------------------------------------------

    def walk(self, value: Any, path: str, key: Optional[str]) -> Any:
        """
        Return the sanitized copy of value, or _DROP when it must be
        removed from its container.
        """
        if isinstance(value, Mapping):
            cleaned = {}
            for name, member in value.items():
                child = self.walk(member, f"{path}.{name}" if path else str(name), str(name))
                if child is not _DROP:
                    cleaned[name] = child
            return cleaned

        if isinstance(value, (list, tuple)):
            cleaned_items = []
            for index, member in enumerate(value):
                child = self.walk(member, f"{path}[{index}]", key)
                if child is not _DROP:
                    cleaned_items.append(child)
            return cleaned_items

        if isinstance(value, str):
            if self._is_uri_valued(value, key):
                return self._inspect_uri(value, path)
            return self._inspect_text(value, path)

        return value

    # ------------------------------------------------------------------
    # Strings
    # ------------------------------------------------------------------

    @staticmethod
    def _scheme_of(value: str) -> Optional[str]:
        match = _SCHEME.match(_SCHEME_NOISE.sub("", value))
        return match.group(1).lower() if match else None

    def _is_uri_valued(self, value: str, key: Optional[str]) -> bool:
        """
        Outside URL fields only well-formed URIs count; a title such as
        'JavaScript: The Good Parts' is text and keeps its value.
        """
        if key in URL_FIELDS:
            return True
        candidate = value.strip()
        return bool(_HIERARCHICAL.match(candidate) or _DATA_URI.match(candidate))

    def _inspect_uri(self, value: str, path: str) -> Any:
        scheme = self._scheme_of(value)

        if scheme in _EXECUTABLE_SCHEMES:
            kind, severity = _EXECUTABLE_SCHEMES[scheme]
            if kind is SecurityFindingKind.DATA_URI:
                message = "Data URI removed from field"
            else:
                message = f"{_SCHEME_NAMES[scheme]} protocol removed from URL"
            self._flag(path, message, kind, severity)
            return _DROP

        if scheme is not None and scheme not in self._config.ALLOWED_URL_SCHEMES:
            self._flag(
                path,
                f"URI scheme '{scheme}:' is not allowed",
                SecurityFindingKind.DISALLOWED_SCHEME,
                SecuritySeverity.MEDIUM,
            )
            return _DROP

        if len(value) > self._config.MAX_URL_LENGTH:
            self._flag(
                path,
                f"URL exceeds maximum length of {self._config.MAX_URL_LENGTH}",
                SecurityFindingKind.MALFORMED_URL,
                SecuritySeverity.LOW,
            )
            return _DROP

        # Relative references and allowed schemes still get markup checks
        return self._inspect_text(value, path)

    def _inspect_text(self, value: str, path: str) -> str:
        cleaned = value

        scripts = primitives.SCRIPT_BLOCK_PATTERN.findall(cleaned)
        if scripts:
            self._flag(
                path,
                "Script block removed from field",
                SecurityFindingKind.SCRIPT,
                SecuritySeverity.HIGH,
            )
            cleaned = primitives.strip_script_blocks(cleaned)

        tags = primitives.HTML_TAG_PATTERN.findall(cleaned)
        if tags:
            self._flag(
                path,
                f"HTML tags removed from field: {', '.join(tags)}",
                SecurityFindingKind.MARKUP,
                SecuritySeverity.MEDIUM,
            )
            cleaned = primitives.strip_html_tags(cleaned)

        if primitives.SCRIPT_PROTOCOL_PATTERN.search(cleaned):
            self._flag(
                path,
                "JavaScript protocol removed from field",
                SecurityFindingKind.SCRIPT_PROTOCOL,
                SecuritySeverity.HIGH,
            )
            cleaned = primitives.strip_script_protocols(cleaned)

        if primitives.EVENT_HANDLER_PATTERN.search(cleaned):
            self._flag(
                path,
                "Inline event handler removed from field",
                SecurityFindingKind.SCRIPT,
                SecuritySeverity.HIGH,
            )
            cleaned = primitives.strip_event_handlers(cleaned)

        return cleaned


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def inspect(
    document: Mapping[str, Any],
    sanitize: bool = False,
    *,
    config: Optional[CuratorConfig] = None,
) -> SecurityReport:
    """
    Report unsafe content in document.

    sanitized is only populated when sanitize=True.
    """
    if not isinstance(document, Mapping):
        raise TypeError(
            f"document must be a mapping, got {type(document).__name__}"
        )

    inspector = _Inspector(config or CuratorConfig())
    cleaned = inspector.walk(document, "", None)

    if inspector.warnings:
        logger.warning(
            "Security inspection found %d issue(s) in fields: %s",
            len(inspector.warnings),
            ", ".join(sorted({w.field for w in inspector.warnings})),
        )

    return SecurityReport(
        warnings=inspector.warnings,
        sanitized=cleaned if sanitize else None,
    )
