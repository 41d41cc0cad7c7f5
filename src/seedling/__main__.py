"""Allow ``python -m seedling``."""

from seedling.cli import main

main()
