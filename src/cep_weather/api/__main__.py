"""
cep_weather.api.__main__

Entrypoint for running either service via `python -m cep_weather.api`.

Responsibilities:
- Load settings (CEPW_ROLE selects gateway or temperature).
- Create the app.
- Start uvicorn with structlog-compatible logging config.
"""

from __future__ import annotations

import uvicorn

from cep_weather.api.app import create_app
from cep_weather.settings import get_settings


def main() -> None:
    settings = get_settings()
    app = create_app(settings=settings)

    uvicorn.run(
        app,
        host=settings.api_host,
        port=settings.api_port,
        log_config=None,  # structlog
    )


if __name__ == "__main__":
    main()


# --- Module Notes -----------------------------------------------------------
# uvicorn drives the lifespan on SIGTERM, which flushes the span exporter.
