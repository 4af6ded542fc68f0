#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdprinters/options/base.py
"""Base classes for printer options.

This module defines the frozen dataclass foundation shared by the LaTeX and
DOCX printer configuration.
"""

from __future__ import annotations

import sys
from dataclasses import dataclass, field, replace
from typing import Any, get_args

if sys.version_info >= (3, 11):
    from typing import Self
else:
    from typing_extensions import Self

from mdprinters.constants import (
    DEFAULT_APPLICATION_LABEL,
    DEFAULT_APPLICATION_LETTERS,
    DEFAULT_CODE_LABEL,
    DEFAULT_FAIL_ON_RESOURCE_ERRORS,
    DEFAULT_MAX_ASSET_SIZE_BYTES,
    DEFAULT_PICTURE_LABEL,
    DEFAULT_ROOT_DIR,
    DEFAULT_TABLE_LABEL,
    DEFAULT_USE_CODE_SPAN_AS,
    DEFAULT_USE_LINK_AS,
    TextInterpretation,
)


@dataclass(frozen=True)
class CloneFrozenMixin:
    """Mixin providing frozen dataclass cloning capabilities."""

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
class BasePrinterOptions(CloneFrozenMixin):
    """Base class for all printer options.

    Parameters
    ----------
    use_link_as : {"default", "monospace", "bold", "underline", "italic", "quotes"}
        How hyperlinks are displayed. ``default`` emits a real hyperlink.
    use_code_span_as : {"default", "monospace", "bold", "underline", "italic", "quotes"}
        How inline code spans are displayed. ``default`` means monospace.
    fail_on_resource_errors : bool, default=False
        Whether to raise RenderingError when an image or formula cannot be
        rendered. If False (default), an Error diagnostic and a placeholder
        are produced and printing continues.
    max_asset_size_bytes : int
        Maximum allowed size in bytes for any single image file.
    root_dir : str
        Directory against which relative picture paths are resolved.
    picture_label, table_label, code_label, application_label : str
        Words used in captions ("Figure 1 -- Title") and appendix headings.
    application_letters : str
        Ordered alphabet used to letter appendices.

    """

    use_link_as: TextInterpretation = field(
        default=DEFAULT_USE_LINK_AS,
        metadata={"help": "How hyperlinks are displayed", "importance": "core"},
    )
    use_code_span_as: TextInterpretation = field(
        default=DEFAULT_USE_CODE_SPAN_AS,
        metadata={"help": "How inline code spans are displayed", "importance": "core"},
    )
    fail_on_resource_errors: bool = field(
        default=DEFAULT_FAIL_ON_RESOURCE_ERRORS,
        metadata={
            "help": "Raise RenderingError on image/formula failures instead of emitting a placeholder",
            "importance": "advanced",
        },
    )
    max_asset_size_bytes: int = field(
        default=DEFAULT_MAX_ASSET_SIZE_BYTES,
        metadata={"help": "Maximum allowed size in bytes for any single image", "type": int, "importance": "security"},
    )
    root_dir: str = field(
        default=DEFAULT_ROOT_DIR,
        metadata={"help": "Directory used to resolve relative picture paths", "importance": "core"},
    )
    picture_label: str = field(default=DEFAULT_PICTURE_LABEL, metadata={"help": "Caption word for pictures"})
    table_label: str = field(default=DEFAULT_TABLE_LABEL, metadata={"help": "Caption word for tables"})
    code_label: str = field(default=DEFAULT_CODE_LABEL, metadata={"help": "Caption word for code listings"})
    application_label: str = field(
        default=DEFAULT_APPLICATION_LABEL, metadata={"help": "Heading word for appendices"}
    )
    application_letters: str = field(
        default=DEFAULT_APPLICATION_LETTERS,
        metadata={"help": "Alphabet used to letter appendices", "importance": "advanced"},
    )

    def __post_init__(self) -> None:
        """Validate shared printer options.

        Raises
        ------
        ValueError
            If any field value is outside its valid range.

        """
        allowed = get_args(TextInterpretation)
        if self.use_link_as not in allowed:
            raise ValueError(f"use_link_as must be one of {allowed}, got {self.use_link_as!r}")
        if self.use_code_span_as not in allowed:
            raise ValueError(f"use_code_span_as must be one of {allowed}, got {self.use_code_span_as!r}")
        if self.max_asset_size_bytes <= 0:
            raise ValueError(f"max_asset_size_bytes must be positive, got {self.max_asset_size_bytes}")
        if not self.application_letters:
            raise ValueError("application_letters must not be empty")
