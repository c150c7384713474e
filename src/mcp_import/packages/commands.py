"""
MCP Package Commands

This module builds launch commands for registry packages.
"""

from ..registry.models import Package

# Launcher per registry type when the package gives no runtime hint
REGISTRY_LAUNCHERS = {
    "npm": "npx",
    "pypi": "python -m",
    "docker": "docker run",
    "oci": "docker run",
}


def get_launcher(registry_type: str | None) -> str | None:
    """Get the launcher for a registry type, or None for unknown registries."""
    if not registry_type:
        return None
    return REGISTRY_LAUNCHERS.get(registry_type.strip().lower())


def build_package_command(package: Package) -> str:
    """Build a human readable launch command for a package.

    The runtime hint wins over the registry type. Runtime arguments come before
    package arguments; blank argument values are left out.
    """
    identifier = package.identifier or ""

    if package.runtime_hint and package.runtime_hint.strip():
        parts = [package.runtime_hint, identifier]
    else:
        launcher = get_launcher(package.registry_type)
        parts = [launcher, identifier] if launcher else [identifier]

    for arg in (package.runtime_arguments or []) + (package.package_arguments or []):
        value = arg.extract_value()
        if value and value.strip():
            parts.append(value)

    return " ".join(p for p in parts if p)
