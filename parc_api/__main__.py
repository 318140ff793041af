import uvicorn

from .core.config import settings


def main() -> None:
    uvicorn.run("parc_api.main:app", host="0.0.0.0", port=settings.PORT, log_level=settings.log_level.lower())


if __name__ == "__main__":
    main()
