"""
Entry point for the polygon offset service.

Running this script with ``python run.py`` starts the FastAPI server
exposing the offset API.  The application defined in
``backend/polyoffset/main.py`` is imported after adjusting the Python
path to include the ``backend`` directory.  ``OFFSET_HOST`` and
``OFFSET_PORT`` override the bind address.
"""

from __future__ import annotations

import os
import sys
from pathlib import Path

import logging
import uvicorn

logging.basicConfig(
    level=logging.DEBUG if os.getenv("OFFSET_DEBUG") else logging.INFO,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)


def main() -> None:
    """Run the Uvicorn server hosting the offset API."""
    backend_dir = Path(__file__).resolve().parent / "backend"
    if str(backend_dir) not in sys.path:
        sys.path.append(str(backend_dir))

    # Import inside main() to avoid modifying sys.path at module import time.
    from polyoffset.main import app  # type: ignore

    host = os.getenv("OFFSET_HOST", "0.0.0.0")
    port = int(os.getenv("OFFSET_PORT", "8000"))
    uvicorn.run(app, host=host, port=port)


if __name__ == "__main__":
    main()
