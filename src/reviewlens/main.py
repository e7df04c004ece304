"""Main entry point for ReviewLens."""

from reviewlens.cli import main as cli_main


def main():
    """Main entry point - delegates to the CLI (``reviewlens ui`` launches the dashboard)."""
    cli_main()


if __name__ == "__main__":
    main()
