"""Development entry point.

Runs the CLI with `python -m main` from `src/` when the package is not
installed (the installed script is `apiclient`).
"""

from __future__ import annotations

from cli.main import run


def main() -> None:
    run()


if __name__ == "__main__":
    main()
