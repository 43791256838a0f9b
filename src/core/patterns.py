"""Include/exclude pattern configuration and matching logic (core domain)."""

from __future__ import annotations

from dataclasses import dataclass
import re
from typing import Any, Mapping, Optional

from core.errors import PatternConfigError

NO_PATTERNS_MESSAGE = "no exclude/include patterns were provided"

_FILE_KEYS = {"regex", "include", "exclude", "match_case"}


def _compile(role: str, pattern: Optional[str], match_case: bool) -> Optional[re.Pattern]:
    if pattern is None:
        return None
    flags = 0 if match_case else re.IGNORECASE
    try:
        return re.compile(pattern, flags)
    except re.error as err:
        raise PatternConfigError(
            f"failed to compile {role} regex from {pattern}: {err}"
        ) from err


@dataclass(frozen=True)
class PatternConfig:
    """Compiled include/exclude configuration shared by every fragment test.

    Literal patterns are stored lowercased when ``match_case`` is off. Regex
    patterns keep their source text and are compiled with ``re.IGNORECASE``
    instead, so escapes such as ``\\S`` keep their meaning.
    """

    use_regex: bool
    match_case: bool
    include: Optional[str]
    exclude: Optional[str]
    include_regex: Optional[re.Pattern] = None
    exclude_regex: Optional[re.Pattern] = None

    @classmethod
    def from_args(
        cls,
        use_regex: bool,
        include: Optional[str],
        exclude: Optional[str],
        match_case: bool,
    ) -> "PatternConfig":
        """Build a config from command-line style values."""

        if not match_case and not use_regex:
            include = include.lower() if include is not None else None
            exclude = exclude.lower() if exclude is not None else None

        include_regex = None
        exclude_regex = None
        if use_regex:
            include_regex = _compile("include", include, match_case)
            exclude_regex = _compile("exclude", exclude, match_case)

        return cls(
            use_regex=use_regex,
            match_case=match_case,
            include=include,
            exclude=exclude,
            include_regex=include_regex,
            exclude_regex=exclude_regex,
        )

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "PatternConfig":
        """Build a config from deserialized config file content.

        Goes through the same normalization as :meth:`from_args`, so a file
        and the equivalent flags always produce the same config.
        """

        unknown = sorted(set(data) - _FILE_KEYS)
        if unknown:
            raise PatternConfigError(f"unknown config keys: {', '.join(unknown)}")

        use_regex = data.get("regex", False)
        match_case = data.get("match_case", False)
        for key, value in (("regex", use_regex), ("match_case", match_case)):
            if not isinstance(value, bool):
                raise PatternConfigError(f"'{key}' must be a boolean, got {value!r}")

        patterns = {}
        for key in ("include", "exclude"):
            value = data.get(key)
            if value is not None and not isinstance(value, str):
                raise PatternConfigError(f"'{key}' must be a string, got {value!r}")
            patterns[key] = value

        return cls.from_args(use_regex, patterns["include"], patterns["exclude"], match_case)

    @property
    def has_patterns(self) -> bool:
        return self.include is not None or self.exclude is not None

    def ensure_patterns(self) -> None:
        """Raise PatternConfigError when neither include nor exclude is set."""

        if not self.has_patterns:
            raise PatternConfigError(NO_PATTERNS_MESSAGE)

    def matches(self, fragment: str) -> bool:
        """Return True when the fragment survives filtering.

        Matching logic:
        - A configured include pattern must be present, otherwise the fragment
          is rejected without looking at the exclude pattern.
        - A configured exclude pattern that is present rejects the fragment,
          even if the include pattern matched.
        """

        haystack = fragment if self.match_case else fragment.lower()
        self.ensure_patterns()

        if self.include is not None and not self._hit(haystack, self.include, self.include_regex):
            return False

        if self.exclude is not None and self._hit(haystack, self.exclude, self.exclude_regex):
            return False

        return True

    def _hit(self, haystack: str, pattern: str, compiled: Optional[re.Pattern]) -> bool:
        if compiled is not None:
            return compiled.search(haystack) is not None
        return pattern in haystack

    def describe(self) -> str:
        """Return a one-line summary used in log messages."""

        parts = [
            "mode=regex" if self.use_regex else "mode=literal",
            f"match_case={self.match_case}",
        ]
        if self.include is not None:
            parts.append(f"include={self.include!r}")
        if self.exclude is not None:
            parts.append(f"exclude={self.exclude!r}")
        return ", ".join(parts)
