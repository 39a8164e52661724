"""
Context object that flows through a middleware chain.
"""

import difflib
from typing import Any, Dict, List, Tuple

from .errors import ContextError


class Context:
    """
    Per-request value bag carried through the middleware chain.

    Public attributes are stored as context values; names starting with an
    underscore belong to the instance itself and are never treated as data.
    """

    def __init__(self, **values: Any) -> None:
        self._values: Dict[str, Any] = {}
        for key, value in values.items():
            setattr(self, key, value)

    def __getattr__(self, name: str) -> Any:
        if not name.startswith('_'):
            values = self.__dict__.get('_values', {})
            if name in values:
                return values[name]
        raise AttributeError(f"'{self.__class__.__name__}' object has no attribute '{name}'")

    def __setattr__(self, name: str, value: Any) -> None:
        if name.startswith('_'):
            super().__setattr__(name, value)
        else:
            self._values[name] = value

    def __contains__(self, name: str) -> bool:
        """Check whether a value is stored under ``name``."""
        return name in self._values

    def __len__(self) -> int:
        """Number of values held."""
        return len(self._values)

    def get(self, name: str, default: Any = None) -> Any:
        """Return the value stored under ``name``, or ``default``."""
        return self._values.get(name, default)

    def set(self, name: str, value: Any) -> None:
        """Store ``value`` under ``name``."""
        self._values[name] = value

    def update(self, **values: Any) -> None:
        """Store several values at once."""
        self._values.update(values)

    def require(self, name: str) -> Any:
        """
        Return the value stored under ``name``.

        Raises ContextError when the value is missing, suggesting keys
        with a similar name.
        """
        try:
            return self._values[name]
        except KeyError:
            error = ContextError(f"Missing context value '{name}'", key=name)
            for candidate in difflib.get_close_matches(name, self._values.keys()):
                error.add_suggestion(candidate)
            raise error from None

    def derive(self, **values: Any) -> 'Context':
        """
        Return a child context holding this context's values plus ``values``.

        The receiver is left untouched, so a middleware can hand a richer
        context to the next layer without leaking it to its caller.
        """
        child = self.copy()
        child.update(**values)
        return child

    def copy(self) -> 'Context':
        """Shallow copy: values are shared, the mapping is not."""
        clone = self.__class__()
        clone._values = dict(self._values)
        return clone

    def keys(self) -> List[str]:
        """Names of all values."""
        return list(self._values.keys())

    def values(self) -> List[Any]:
        """All stored values."""
        return list(self._values.values())

    def items(self) -> List[Tuple[str, Any]]:
        """All name-value pairs."""
        return list(self._values.items())

    def __repr__(self) -> str:
        return f"Context({self._values})"

    def __str__(self) -> str:
        pairs = ', '.join(f'{k}={v!r}' for k, v in self._values.items())
        return f"Context({pairs})"
