"""Run the API with uvicorn: ``python -m teacher_records``."""
from __future__ import annotations

import uvicorn

from .config import HOST, LOG_LEVEL, PORT


def main() -> None:  # pragma: no cover - process entry point
    uvicorn.run("teacher_records.app:app", host=HOST, port=PORT, log_level=LOG_LEVEL.lower())


if __name__ == "__main__":  # pragma: no cover
    main()
