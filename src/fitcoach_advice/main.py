"""Process entrypoint: serve the advice API with uvicorn."""

import logging

import uvicorn

from fitcoach_advice.api.app import create_app
from fitcoach_advice.app_logging import configure_logging
from fitcoach_advice.config import Settings
from fitcoach_advice.containers import build_container


def main() -> None:
    """Start the HTTP server on the configured port."""
    settings = Settings()
    configure_logging()
    logger = logging.getLogger(__name__)
    app = create_app(build_container(settings))
    logger.info("fitcoach-advice listening on %s:%s", settings.host, settings.port)
    uvicorn.run(app, host=settings.host, port=settings.port)


if __name__ == "__main__":
    main()
