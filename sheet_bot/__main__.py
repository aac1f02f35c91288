"""Entrypoint for `python -m sheet_bot`."""

from .cli import main


if __name__ == "__main__":
    main()
