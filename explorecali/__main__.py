"""
Run the recommendation API.

Usage:
    python -m explorecali
"""
from __future__ import annotations

import uvicorn

from .config import DEFAULT_CONFIG


def main() -> None:
    uvicorn.run(
        "explorecali.app:app",
        host=DEFAULT_CONFIG.host,
        port=DEFAULT_CONFIG.port,
        log_level=DEFAULT_CONFIG.log_level.lower(),
    )


if __name__ == "__main__":
    main()
