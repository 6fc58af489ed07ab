"""Allow ``python -m kubeblinkt``."""

from kubeblinkt.cli.main import cli

if __name__ == "__main__":
    cli()
