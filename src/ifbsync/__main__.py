"""Module entrypoint for ``python -m ifbsync``."""

from ifbsync.cli import main

if __name__ == "__main__":
    raise SystemExit(main())
