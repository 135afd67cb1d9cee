"""Run the API with uvicorn.

Usage:
    python -m academy.serve
"""
import uvicorn

from academy.core import config


def main() -> None:
    uvicorn.run(
        "academy.main:app",
        host=config.HOST,
        port=config.PORT,
        log_level=config.LOG_LEVEL.lower(),
    )


if __name__ == "__main__":
    main()
