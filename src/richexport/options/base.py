"""Base classes for renderer options.

Every renderer takes a frozen options dataclass. Field metadata carries a
short help text and importance level for each option.
"""

from __future__ import annotations

import sys
from dataclasses import dataclass, field, replace
from typing import Any

if sys.version_info >= (3, 11):
    from typing import Self
else:
    from typing_extensions import Self


@dataclass(frozen=True)
class CloneFrozenMixin:
    """Mixin providing frozen dataclass cloning capabilities.

    This mixin adds the ability to create modified copies of frozen dataclass
    instances, which is useful for immutable configuration objects.
    """

    def create_updated(self, **kwargs: Any) -> Self:
        """Create a new instance with updated field values.

        Parameters
        ----------
        **kwargs : Any
            Field names and their new values

        Returns
        -------
        Self
            New instance with specified fields updated

        """
        return replace(self, **kwargs)


@dataclass(frozen=True)
class BaseRendererOptions(CloneFrozenMixin):
    """Base class for all renderer options.

    Parameters
    ----------
    fail_on_resource_errors : bool, default=False
        Whether to raise RenderingError when a resource (an embedded image)
        cannot be used. If False (default), a warning is logged and the
        renderer falls back to text.

    """

    fail_on_resource_errors: bool = field(
        default=False,
        metadata={
            "help": "Raise RenderingError on resource failures (images) instead of logging warnings",
            "importance": "advanced",
        },
    )

    def __post_init__(self) -> None:
        """Hook for subclass validation."""
