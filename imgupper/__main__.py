"""Run the API server. Usage: python -m imgupper"""
import uvicorn

from imgupper.config import get_settings


def main() -> None:
    settings = get_settings()
    uvicorn.run(
        "imgupper.main:app",
        host=settings.host,
        port=settings.port,
        timeout_keep_alive=120,
        timeout_graceful_shutdown=10,
    )


if __name__ == "__main__":
    main()
