"""Run the service with uvicorn: ``python -m kisanmitra``."""

import uvicorn

from kisanmitra.config import settings


def main() -> None:
    uvicorn.run(
        "kisanmitra.main:app",
        host=settings.host,
        port=settings.port,
        log_config=None,
    )


if __name__ == "__main__":
    main()
