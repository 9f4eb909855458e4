"""Module entry point for `python -m correspondence_check`."""

from .cli import main

if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
