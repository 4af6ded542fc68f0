#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdprinters/utils/packages.py
"""Installed package lookups used by the dependency checks."""

from __future__ import annotations

import importlib
from dataclasses import dataclass, field
from importlib import metadata
from typing import Iterable, Optional, Tuple

from packaging import version
from packaging.specifiers import SpecifierSet

#: (install name, import name, version specifier) of one required package
Requirement = Tuple[str, str, str]


def get_package_version(package_name: str) -> Optional[str]:
    """Installed version of a distribution, or None when it is not installed."""
    try:
        return metadata.version(package_name)
    except metadata.PackageNotFoundError:
        return None


def check_version_requirement(package_name: str, version_spec: str) -> Tuple[bool, Optional[str]]:
    """Compare the installed version of ``package_name`` with ``version_spec``.

    Returns
    -------
    tuple of (bool, str or None)
        Whether the specifier is met, and the installed version. A
        distribution that is not installed never meets it.

    """
    installed = get_package_version(package_name)
    if installed is None:
        return False, None
    return version.parse(installed) in SpecifierSet(version_spec), installed


@dataclass
class RequirementReport:
    """Requirements that are not met by the running interpreter."""

    missing: list[tuple[str, str]] = field(default_factory=list)
    mismatches: list[tuple[str, str, str]] = field(default_factory=list)
    import_error: Optional[Exception] = None

    @property
    def ok(self) -> bool:
        return not (self.missing or self.mismatches)


def check_requirements(requirements: Iterable[Requirement]) -> RequirementReport:
    """Import each required module and check its distribution version.

    A module that fails to import, including one whose native library is
    missing (cairosvg raises OSError without libcairo), counts as missing.
    The first such error is kept on the report so callers can chain it.
    """
    report = RequirementReport()
    for install_name, import_name, version_spec in requirements:
        try:
            importlib.import_module(import_name)
        except (ImportError, OSError) as e:
            report.missing.append((install_name, version_spec))
            report.import_error = report.import_error or e
            continue
        if not version_spec:
            continue
        meets, installed = check_version_requirement(install_name, version_spec)
        if not meets:
            report.mismatches.append((install_name, version_spec, installed or "unknown"))
    return report
