"""
CLI layer for dbspine.

Terminal transport only: argument parsing, explicit module loading, and
Rich output. Resolution and dispatch live in ``dbspine.core``.

Entry point::

    dbspine --help
"""

from dbspine.cli.app import app

__all__ = ["app"]
