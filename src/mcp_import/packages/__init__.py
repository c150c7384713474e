"""
MCP Package Module

Launch command synthesis for registry packages (npm, PyPI, Docker/OCI).
"""

from .commands import REGISTRY_LAUNCHERS, build_package_command, get_launcher

__all__ = [
    "REGISTRY_LAUNCHERS",
    "build_package_command",
    "get_launcher"
]
