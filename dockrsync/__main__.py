"""
Main entry point for the dockrsync CLI.
"""

from dockrsync.cli import cli


def main() -> None:
    """Main function for the dockrsync CLI."""
    cli()


if __name__ == "__main__":
    main()
