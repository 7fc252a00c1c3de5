"""Allow ``python -m openiban``."""

from openiban.cli.main import app

if __name__ == "__main__":
    app()
