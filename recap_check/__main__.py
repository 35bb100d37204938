"""Allow ``python -m recap_check``."""

from recap_check.main import cli

cli()
