"""Allow ``python -m httprender``."""

from httprender.cli.app import app

app()
