"""Application entry point.

Configures logging, wires the application components and serves the webhook
and health endpoints with uvicorn.
"""

import logging

import uvicorn

from .core.container import Container
from .web import create_app


def main() -> None:
    """Main application entry point.

    Loads configuration from the environment, builds the FastAPI application
    and runs it on the configured host and port. Missing required settings do
    not stop the server; they are reported by the health endpoint and every
    webhook request is refused until they are fixed.
    """
    container = Container()
    settings = container.settings()

    logging.basicConfig(
        format="%(asctime)s - %(levelname)s - %(message)s",
        level=settings.log_level.upper(),
    )
    logger = logging.getLogger(__name__)

    missing = [name for name, present in settings.health_flags().items() if not present]
    if missing:
        logger.warning("Starting with incomplete configuration: %s", ", ".join(missing))

    app = create_app(container)
    logger.info("Starting webhook server on %s:%s", settings.listen_host, settings.port)
    uvicorn.run(app, host=settings.listen_host, port=settings.port, log_level=settings.log_level.lower())


if __name__ == "__main__":
    main()
