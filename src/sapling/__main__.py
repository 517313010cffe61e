"""Allow ``python -m sapling``."""

from sapling.cli import main

if __name__ == "__main__":
    main()
