"""Application entrypoint."""

import uvicorn

from vidly.config import get_settings


def main() -> None:
    """Serve the API with uvicorn.

    Returns
    -------
    None
        Blocks until the server stops.
    """
    settings = get_settings()
    uvicorn.run(
        "vidly.main:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
