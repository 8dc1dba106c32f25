# File: scaffoldgen/__main__.py
"""
scaffoldgen — Module entry point.

Allows running the generator directly via::

    python -m scaffoldgen generate -c scaffold.yaml

This module simply delegates to the CLI entry point defined in
``scaffoldgen.cli``.
"""

from __future__ import annotations


def main() -> None:
    """Delegate to the CLI main function."""
    from scaffoldgen.cli import main as cli_entry
    cli_entry()


if __name__ == "__main__":
    main()
