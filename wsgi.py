"""Server entrypoint."""
from __future__ import annotations

import sys

from pipup import create_app
from pipup.serving import run_server

app = create_app()


def main() -> int:
    return run_server(app)


if __name__ == "__main__":
    sys.exit(main())
