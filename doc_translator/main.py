import uvicorn

from doc_translator.api.app import create_app
from doc_translator.config.settings import Settings
from doc_translator.database.connection import close_pool
from doc_translator.logging.logger import Log


def main() -> None:
    """Entry point: settings -> logging -> adapters -> HTTP server."""
    settings = Settings()
    Log.configure(settings.log_level)

    try:
        app = create_app(settings)
        uvicorn.run(app, host=settings.host, port=settings.port, log_level=settings.log_level.lower())
    finally:
        close_pool()


if __name__ == "__main__":
    main()
