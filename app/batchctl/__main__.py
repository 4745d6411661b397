"""Allow ``python -m batchctl``."""

from batchctl.cli.main import app

app(prog_name="batchctl")
