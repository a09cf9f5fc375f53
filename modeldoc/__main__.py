"""Entry point for running modeldoc as a module (python -m modeldoc)."""

from __future__ import annotations


def main() -> None:
    """Main entry point for module execution."""
    from modeldoc.cli import main as cli_main

    cli_main()


if __name__ == "__main__":
    main()
