import uvicorn

from exam_compressor.api.app import create_app
from exam_compressor.config.settings import Settings
from exam_compressor.logging.logger import Log


def main() -> None:
    """Entry point: load settings -> configure logging -> serve the API."""
    settings = Settings()
    Log.configure(settings.log_level)
    Log.info(f"Starting server at http://{settings.server_host}:{settings.server_port}")
    uvicorn.run(
        create_app(settings),
        host=settings.server_host,
        port=settings.server_port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
