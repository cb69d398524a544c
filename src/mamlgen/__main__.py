"""Entry point for ``python -m mamlgen``."""

from mamlgen.cli import main

if __name__ == "__main__":
    main()
