#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdprinters/exceptions.py
"""Exceptions raised by mdprinters.

Most problems met while printing a tree (unsupported nodes, list items
outside a list, unreadable pictures) become diagnostics and never raise.
Exceptions are left for failures the caller has to act on: a misconfigured
printer, a visitor that does not cover every node type, a rendering failure
under ``fail_on_resource_errors`` and missing optional packages.

Exception Hierarchy
-------------------
- MdPrintersError

  - ValidationError
    - InvalidOptionsError (options object of the wrong class)
    - VisitorTableError (node types without a handler)

  - RenderingError
    - FormulaRenderError (TeX could not be typeset or rasterized)
    - OutputWriteError (output could not be written)

  - DependencyError (package missing or too old)

"""

from typing import Any, Iterable


class MdPrintersError(Exception):
    """Root of every mdprinters exception.

    Parameters
    ----------
    message : str
        Description of the failure
    original_error : Exception, optional
        Lower level exception this one wraps

    """

    def __init__(self, message: str, original_error: Exception | None = None):
        super().__init__(message)
        self.message = message
        self.original_error = original_error


class ValidationError(MdPrintersError):
    """A printer was given a value it cannot work with."""

    def __init__(
        self,
        message: str,
        parameter_name: str | None = None,
        parameter_value: Any = None,
        original_error: Exception | None = None,
    ):
        super().__init__(message, original_error=original_error)
        self.parameter_name = parameter_name
        self.parameter_value = parameter_value


class InvalidOptionsError(ValidationError):
    """A printer received an options object of the wrong class.

    Parameters
    ----------
    printer_name : str
        Printer that rejected the options
    expected_type, received_type : type
        Options class the printer accepts, and the one it got

    """

    def __init__(
        self,
        printer_name: str,
        expected_type: type,
        received_type: type,
        message: str | None = None,
        original_error: Exception | None = None,
    ):
        if message is None:
            message = (
                f"The {printer_name} printer takes '{expected_type.__name__}' options, "
                f"got '{received_type.__name__}'."
            )
        super().__init__(message, "options", received_type, original_error)
        self.printer_name = printer_name
        self.expected_type = expected_type
        self.received_type = received_type


class VisitorTableError(ValidationError):
    """A visitor leaves some node types without a handler."""

    def __init__(self, visitor_name: str, missing_types: Iterable[str]):
        self.missing_types = sorted(missing_types)
        self.visitor_name = visitor_name
        super().__init__(
            f"{visitor_name} has no handler for node types: {', '.join(self.missing_types)}",
            parameter_name="visitor",
            parameter_value=visitor_name,
        )


class RenderingError(MdPrintersError):
    """Output could not be produced.

    Attributes
    ----------
    rendering_stage : str or None
        Step that failed, e.g. ``"image_processing"``, ``"formula"`` or
        ``"file_write"``

    """

    def __init__(self, message: str, rendering_stage: str | None = None, original_error: Exception | None = None):
        super().__init__(message, original_error)
        self.rendering_stage = rendering_stage


class FormulaRenderError(RenderingError):
    """TeX source could not be turned into a picture.

    ``excerpt`` holds the error text the typesetter reported, when one could
    be found in its output; it is appended to the message.
    """

    def __init__(self, message: str, excerpt: str | None = None, original_error: Exception | None = None):
        super().__init__(f"{message}: {excerpt}" if excerpt else message, "formula", original_error)
        self.excerpt = excerpt


class OutputWriteError(RenderingError):
    """Printed output could not be written to its destination."""

    def __init__(self, file_path: str, message: str | None = None, original_error: Exception | None = None):
        super().__init__(message or f"Failed to write output file: {file_path}", "file_write", original_error)
        self.file_path = file_path


def _requirement(name: str, spec: str) -> str:
    return f"{name}{spec}" if spec else name


def _dependency_message(
    printer_name: str,
    missing_packages: list[tuple[str, str]],
    version_mismatches: list[tuple[str, str, str]],
) -> str:
    lines = []
    if missing_packages:
        names = ", ".join(f"'{_requirement(name, spec)}'" for name, spec in missing_packages)
        lines.append(f"{printer_name} requires the following packages: {names}")
    if version_mismatches:
        details = ", ".join(
            f"'{name}' (requires {required}, but {installed} is installed)"
            for name, required, installed in version_mismatches
        )
        lines.append(f"{printer_name} has version mismatches: {details}")

    to_install = [_requirement(name, spec) for name, spec in missing_packages]
    to_install += [_requirement(name, required) for name, required, _ in version_mismatches]
    if to_install:
        lines.append("Install with: pip install --upgrade " + " ".join(f'"{req}"' for req in to_install))
    return "\n".join(lines)


class DependencyError(MdPrintersError):
    """A package needed for the requested output is missing or too old.

    Parameters
    ----------
    printer_name : str
        Component that needs the packages
    missing_packages : list of (name, version_spec)
        Packages that could not be imported
    version_mismatches : list of (name, required, installed), optional
        Packages installed at a version outside the specifier
    original_import_error : Exception, optional
        First import failure met while checking (ImportError, or OSError
        for a missing native library)

    """

    def __init__(
        self,
        printer_name: str,
        missing_packages: list[tuple[str, str]],
        version_mismatches: list[tuple[str, str, str]] | None = None,
        message: str | None = None,
        original_import_error: Exception | None = None,
    ):
        version_mismatches = version_mismatches or []
        super().__init__(message or _dependency_message(printer_name, missing_packages, version_mismatches))
        self.printer_name = printer_name
        self.missing_packages = missing_packages
        self.version_mismatches = version_mismatches
        self.original_import_error = original_import_error
