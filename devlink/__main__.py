"""Run the API with uvicorn: ``python -m devlink``."""
from __future__ import annotations

import os

import uvicorn

from devlink.db import create_all


def main() -> None:
    create_all()
    uvicorn.run(
        "devlink.app:create_app",
        factory=True,
        host=os.getenv("HOST", "0.0.0.0"),
        port=int(os.getenv("PORT", "7777")),
    )


if __name__ == "__main__":
    main()
