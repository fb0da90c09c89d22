"""Per-branch result type for composite aggregations.

A failing branch of a multi-branch lookup is captured as a ``Result`` carrying
the error, then reduced to an empty collection by the aggregator that owns it.
"""

import logging
from dataclasses import dataclass
from typing import Callable, Generic, TypeVar

T = TypeVar('T')

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Result(Generic[T]):
    """Either a value or the exception that prevented computing it."""

    value: T | None = None
    error: Exception | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def capture(cls, fn: Callable[..., T], *args, **kwargs) -> 'Result[T]':
        """Run ``fn`` and wrap its return value or raised exception."""
        try:
            return cls(value=fn(*args, **kwargs))
        except Exception as e:
            return cls(error=e)

    def value_or(self, default: T, branch: str = '') -> T:
        """Return the value, or ``default`` after logging the captured error."""
        if self.ok:
            return self.value
        logger.warning("Branch %s failed, using empty result: %s", branch or '?', self.error)
        return default
