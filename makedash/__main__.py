"""Module entrypoint for ``python -m makedash``."""

from .cli import main


if __name__ == "__main__":
    main()
