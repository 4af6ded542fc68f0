#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdprinters/utils/decorators.py
"""Decorators and context managers shared by printers and asset services."""

from __future__ import annotations

import logging
import time
from contextlib import contextmanager
from functools import wraps
from typing import Any, Callable, Iterator, Sequence

from mdprinters.exceptions import DependencyError
from mdprinters.utils.packages import Requirement, check_requirements


def requires_dependencies(printer_name: str, packages: Sequence[Requirement]) -> Callable:
    """Refuse to run the decorated callable until its packages are importable.

    The check runs on every call, so a printer can be constructed in an
    environment that lacks the packages and still fail with a clear message
    only when output is requested.

    Parameters
    ----------
    printer_name : str
        Component named in the error message, e.g. ``"docx"``
    packages : sequence of (install_name, import_name, version_spec)
        ``install_name`` is what ``pip install`` takes, ``import_name`` the
        module to import, ``version_spec`` a specifier such as ``">=1.2.0"``
        or an empty string for any version.

    Raises
    ------
    DependencyError
        If a package is missing or its installed version does not match.

    Examples
    --------
        >>> @requires_dependencies("docx", [("python-docx", "docx", ">=1.2.0")])
        ... def render(self, root, output):
        ...     ...

    """

    def decorator(method: Callable) -> Callable:
        @wraps(method)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            report = check_requirements(packages)
            if not report.ok:
                raise DependencyError(
                    printer_name=printer_name,
                    missing_packages=report.missing,
                    version_mismatches=report.mismatches,
                    original_import_error=report.import_error,
                ) from report.import_error
            return method(*args, **kwargs)

        return wrapper

    return decorator


@contextmanager
def debug_timer(logger: logging.Logger, operation: str) -> Iterator[None]:
    """Log how long the block took, at DEBUG level only."""
    if not logger.isEnabledFor(logging.DEBUG):
        yield
        return
    started = time.perf_counter()
    yield
    logger.debug("%s completed in %.2fs", operation, time.perf_counter() - started)
