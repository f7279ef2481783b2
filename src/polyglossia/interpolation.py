"""Template interpolation.

Two placeholder syntaxes are resolved in one call, primary first:

- Configurable delimiters (default ``${name}``) with dotted paths
  (``${user.name}``) looked up through nested mappings or attributes
- Fixed single-brace ``{name}`` placeholders (no dotted paths)

Missing values leave the placeholder untouched. ``None`` renders as
``"null"``. Substituted values are never re-scanned.
"""

from __future__ import annotations

import re
import threading
from typing import Any, Mapping

from polyglossia.numerals import plain_decimal


_MISSING = object()

_SIMPLE_PLACEHOLDER = re.compile(r"\{(\w+)\}")


def stringify(value: Any) -> str:
    """Render a parameter value the way it appears in translated text."""
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)):
        return plain_decimal(value)
    return str(value)


def resolve_path(params: Mapping[str, Any], path: str) -> Any:
    """Resolve a dotted path against nested mappings or object attributes.

    Returns the module sentinel ``_MISSING`` if any segment is absent.
    """
    current: Any = params
    for segment in path.split("."):
        if current is None:
            return _MISSING
        if isinstance(current, Mapping):
            current = current.get(segment, _MISSING)
        else:
            current = getattr(current, segment, _MISSING)
        if current is _MISSING:
            return _MISSING
    return current


class Interpolator:
    """Substitutes parameters into translation templates.

    Example:
        interpolator = Interpolator()
        interpolator.interpolate("Hello ${user.name}, {count} new", {
            "user": {"name": "Dana"},
            "count": 3,
        })
        # -> "Hello Dana, 3 new"

        Interpolator(prefix="{{", suffix="}}").interpolate("Hi {{name}}", {"name": "Sam"})
        # -> "Hi Sam"
    """

    _pattern_cache: dict[tuple[str, str], re.Pattern[str]] = {}
    _pattern_lock = threading.Lock()

    def __init__(self, prefix: str = "${", suffix: str = "}") -> None:
        self.prefix = prefix
        self.suffix = suffix
        self._pattern = self._compile(prefix, suffix)

    @classmethod
    def _compile(cls, prefix: str, suffix: str) -> re.Pattern[str]:
        key = (prefix, suffix)
        with cls._pattern_lock:
            pattern = cls._pattern_cache.get(key)
            if pattern is None:
                pattern = re.compile(
                    f"{re.escape(prefix)}(\\w+(?:\\.\\w+)*){re.escape(suffix)}"
                )
                cls._pattern_cache[key] = pattern
            return pattern

    def interpolate(self, template: str, params: Mapping[str, Any] | None) -> str:
        """Interpolate parameters into a template.

        Args:
            template: Template text
            params: Parameter values (nested mappings allowed)

        Returns:
            Interpolated text
        """
        if not template or not params:
            return template

        def replace_primary(match: re.Match[str]) -> str:
            value = resolve_path(params, match.group(1))
            if value is _MISSING:
                return match.group(0)
            return stringify(value)

        def replace_simple(match: re.Match[str]) -> str:
            value = params.get(match.group(1), _MISSING)
            if value is _MISSING:
                return match.group(0)
            return stringify(value)

        # Both passes run over the template pieces only, so values are not re-scanned
        pieces: list[str] = []
        last = 0
        for match in self._pattern.finditer(template):
            pieces.append(_SIMPLE_PLACEHOLDER.sub(replace_simple, template[last:match.start()]))
            pieces.append(replace_primary(match))
            last = match.end()
        pieces.append(_SIMPLE_PLACEHOLDER.sub(replace_simple, template[last:]))
        return "".join(pieces)


_default_interpolator = Interpolator()


def interpolate(template: str, params: Mapping[str, Any] | None) -> str:
    """Interpolate with the default ``${name}`` delimiters."""
    return _default_interpolator.interpolate(template, params)
