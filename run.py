"""Entry point for the Club Directory API.

Launches the FastAPI application with Uvicorn.  Host, port and log
level come from the environment (see ``club_directory_api.app.core.config``).

Usage:
    python run.py
"""
from uvicorn import Config, Server

from club_directory_api.app.core.config import settings
from club_directory_api.app.core.logging_config import setup_logging
from club_directory_api.app.main import app


def main() -> None:
    """Serve the API until interrupted.

    Uvicorn is started without its own logging config so its access
    and error lines go through the handlers set up by ``setup_logging``.
    """
    setup_logging(settings)
    config = Config(
        app=app,
        host=settings.host,
        port=settings.port,
        reload=False,
        log_config=None,
    )
    Server(config).run()


if __name__ == "__main__":
    try:
        main()
    except (KeyboardInterrupt, SystemExit):
        pass
