"""gitdesk - point-and-click control layer over the git command-line tool."""

from __future__ import annotations

__version__ = "0.1.0"

__all__ = ["__version__"]
