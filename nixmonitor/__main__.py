"""Allow ``python -m nixmonitor``."""

from nixmonitor.cli.app import main

main()
