"""Entrypoint for `python -m BLPConverter`."""
from .cli import main


if __name__ == "__main__":
    main()
