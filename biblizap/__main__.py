"""Entry point for running biblizap as a module or installed script.

Usage:
    biblizap / python -m biblizap                 → GUI (uvicorn)
    biblizap <command> ... / python -m biblizap <command> ... → CLI
"""

import sys

import uvicorn


def run() -> None:
    """Entry point: no args → GUI (via uvicorn), else → CLI."""
    if len(sys.argv) == 1:
        uvicorn.run("biblizap.gui.app:app", host="127.0.0.1", port=8000)
    else:
        from biblizap.cli import main
        sys.exit(main())


if __name__ == "__main__":
    run()
