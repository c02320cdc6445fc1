"""
GVT - minimal local version control.

Tracks per-file snapshots inside a hidden ``.gvt`` directory, assigning
global version numbers shared by every tracked file.
"""

__version__ = "0.1.0"
