"""Allow running the CLI with ``python -m hirepath``."""

from hirepath.cli import app

if __name__ == "__main__":
    app()
