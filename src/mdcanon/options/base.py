"""Base classes for renderer options.

This module defines the foundation classes for the option objects used by
mdcanon renderers.
"""

from __future__ import annotations

import codecs
import sys
from dataclasses import dataclass, field, replace
from typing import Any

if sys.version_info >= (3, 11):
    from typing import Self
else:
    from typing_extensions import Self

from mdcanon.constants import DEFAULT_ENCODING


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
    encoding : str, default='utf-8'
        Text encoding of the source buffer. Used to decode link labels for
        escaping and to decode output returned as ``str``.

    Notes
    -----
    Subclasses should define renderer-specific options as frozen dataclass fields.

    """

    encoding: str = field(
        default=DEFAULT_ENCODING,
        metadata={
            "help": "Text encoding of the source buffer and of string output",
            "importance": "advanced",
        },
    )

    def __post_init__(self) -> None:
        """Validate base renderer options.

        Raises
        ------
        ValueError
            If the encoding is not a known codec.

        """
        try:
            codecs.lookup(self.encoding)
        except LookupError as e:
            raise ValueError(f"Unknown encoding: {self.encoding!r}") from e
