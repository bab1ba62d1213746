"""Allow running Playmatch with ``python -m playmatch``."""

from playmatch.cli import app

app(prog_name="playmatch")
