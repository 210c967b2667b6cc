# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Application entry point.

Run with:
    uvicorn registrar.main:app --host 0.0.0.0 --port 8080
or:
    python -m registrar.main
"""

import uvicorn

from registrar.api.app import create_app
from registrar.core.config import get_settings
from registrar.utils.logging import get_logger, setup_logging

app = create_app()


def main() -> None:
    """Run the API server with the configured host, port and workers."""
    settings = get_settings()
    setup_logging(settings)
    get_logger(__name__).info(
        "Launching server",
        host=settings.api.host,
        port=settings.api.port,
        workers=settings.api.workers,
    )
    uvicorn.run(
        "registrar.main:app",
        host=settings.api.host,
        port=settings.api.port,
        workers=settings.api.workers,
        reload=settings.api.reload,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
