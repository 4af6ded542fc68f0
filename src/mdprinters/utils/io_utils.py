#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdprinters/utils/io_utils.py
"""Writing printed output to paths and streams."""

from __future__ import annotations

import io
from pathlib import Path
from typing import IO, Any, Union

from mdprinters.exceptions import OutputWriteError

OutputTarget = Union[str, Path, IO[bytes], IO[str], None]


def _is_binary_stream(stream: Any) -> bool:
    if isinstance(stream, io.TextIOBase):
        return False
    if isinstance(stream, (io.BufferedIOBase, io.RawIOBase)):
        return True
    # Duck-typed streams only tell us through their mode
    mode = getattr(stream, "mode", "")
    return isinstance(mode, str) and "b" in mode


def write_content(content: Union[str, bytes], output: OutputTarget) -> Union[io.StringIO, io.BytesIO, None]:
    """Send printed content to ``output``.

    Parameters
    ----------
    content : str or bytes
        LaTeX source or a serialized DOCX package
    output : str, Path, file-like or None
        A path is written as a file (text as UTF-8). A stream receives the
        content converted to its own mode. ``None`` asks for an in-memory
        copy instead.

    Returns
    -------
    StringIO, BytesIO or None
        The in-memory copy when ``output`` is None.

    Raises
    ------
    OutputWriteError
        If the file cannot be written
    TypeError
        For content other than str or bytes, or an output that is neither a
        path nor writable

    """
    if not isinstance(content, (str, bytes)):
        raise TypeError(f"Content must be str or bytes, got {type(content)}")

    if output is None:
        return io.StringIO(content) if isinstance(content, str) else io.BytesIO(content)

    if isinstance(output, (str, Path)):
        path = Path(output)
        data = content.encode("utf-8") if isinstance(content, str) else content
        try:
            path.write_bytes(data)
        except OSError as e:
            raise OutputWriteError(str(path), original_error=e) from e
        return None

    if not hasattr(output, "write"):
        raise TypeError(f"Unsupported output type: {type(output)}")

    if _is_binary_stream(output):
        output.write(content.encode("utf-8") if isinstance(content, str) else content)
    else:
        output.write(content.decode("utf-8") if isinstance(content, bytes) else content)
    return None


__all__ = ["OutputTarget", "write_content"]
