"""Run the service with uvicorn: ``python -m shortlink``."""

import uvicorn

from shortlink.core.config import settings


def main() -> None:
    uvicorn.run(
        "shortlink.main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.DEBUG,
        log_config=None,  # Logging is handled by loguru
    )


if __name__ == "__main__":
    main()
