"""Entry point: python -m servicegen

Reads a declaration dump, writes the generated Kotlin sources.
"""

from __future__ import annotations

from .cli import app


def main() -> None:
    app()


if __name__ == "__main__":
    main()
