"""Allow ``python -m dockwright``."""

from dockwright.cli import main

main()
