"""
authgate.api.__main__

Entrypoint for running the service via `python -m authgate.api`.

Responsibilities:
- Load settings.
- Create the app.
- Start uvicorn with structlog-compatible logging config.
"""

from __future__ import annotations

import uvicorn

from authgate.api.app import create_app
from authgate.settings import get_settings


def main() -> None:
    settings = get_settings()
    if settings.env == "prod" and settings.uses_default_secrets:
        raise SystemExit(
            "refusing to start: AUTHGATE_PASSWORD_SALT and AUTHGATE_TOKEN_SECRET must be set"
        )

    app = create_app(settings=settings)

    uvicorn.run(
        app,
        host=settings.api_host,
        port=settings.api_port,
        log_config=None,  # structlog
    )


if __name__ == "__main__":
    main()
