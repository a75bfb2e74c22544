"""Allow ``python -m choosy``."""

from choosy.cli import cli_main

cli_main()
