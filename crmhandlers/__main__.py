"""Module entrypoint for running crmhandlers as ``python -m crmhandlers``."""

from __future__ import annotations

from crmhandlers.cli import main


if __name__ == "__main__":
    main()
