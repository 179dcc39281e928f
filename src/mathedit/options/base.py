"""Base classes for mathedit options.

This module defines the foundation classes for the frozen dataclass options
used by the renderer and the editing controller.
"""

from __future__ import annotations

import sys
from dataclasses import dataclass, field, fields, replace
from typing import Any, Mapping

if sys.version_info >= (3, 11):
    from typing import Self
else:
    from typing_extensions import Self

from mathedit.exceptions import ValidationError


@dataclass(frozen=True)
class CloneFrozenMixin:
    """Copy-with-changes and mapping construction for frozen option classes.

    Options are shared between a controller and its renderer, so they are
    never mutated; a variant is derived with ``create_updated`` instead.
    """

    def create_updated(self, **kwargs: Any) -> Self:
        """Return a copy with some fields replaced.

        ``__post_init__`` runs again, so the copy is validated and normalized
        like a freshly built instance.

        Parameters
        ----------
        **kwargs : Any
            Fields to replace

        Returns
        -------
        Self
            The modified copy

        """
        return replace(self, **kwargs)

    @classmethod
    def from_mapping(cls, values: Mapping[str, Any]) -> Self:
        """Build an instance from a plain mapping, e.g. a config file table.

        Parameters
        ----------
        values : Mapping[str, Any]
            Field names and values. Dashes in keys are treated as underscores.

        Returns
        -------
        Self
            New instance with the given fields set and defaults elsewhere

        Raises
        ------
        ValidationError
            If the mapping names a field the class does not have

        """
        known = {f.name for f in fields(cls)}
        kwargs: dict[str, Any] = {}
        for key, value in values.items():
            name = str(key).replace("-", "_")
            if name not in known:
                raise ValidationError(
                    f"Unknown option '{key}' for {cls.__name__}. Valid options: {', '.join(sorted(known))}",
                    parameter_name=str(key),
                    parameter_value=value,
                )
            kwargs[name] = value
        return cls(**kwargs)


@dataclass(frozen=True)
class BaseRendererOptions(CloneFrozenMixin):
    """Base class for renderer options.

    Parameters
    ----------
    fail_on_invalid_tree : bool, default=False
        Whether to validate a tree's structure before rendering it and raise
        ``ValidationError`` on the first problem found.

    Notes
    -----
    Subclasses add their own markup options as frozen dataclass fields.

    """

    fail_on_invalid_tree: bool = field(
        default=False,
        metadata={
            "help": "Validate tree structure before rendering and raise on the first problem",
            "importance": "advanced",
        },
    )
