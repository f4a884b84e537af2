"""Stores the version number for the proxyobserver library.

This module simply defines the `__version__` constant, which contains the
current version string for the `proxyobserver` package. It is read by the
build backend when the package is built.
"""

# The single source of truth for the package version.
__version__ = "0.2.0"
