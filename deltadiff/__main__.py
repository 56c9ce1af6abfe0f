"""Entry point for ``python -m deltadiff``."""

from deltadiff.cli import main

if __name__ == "__main__":
    main()
