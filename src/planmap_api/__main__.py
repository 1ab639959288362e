"""Run the mock backend on the configured host and port."""

import uvicorn

from planmap.config import settings


def main() -> None:
    uvicorn.run(
        "planmap_api.main:app",
        host=settings.mock_api_host,
        port=settings.mock_api_port,
    )


if __name__ == "__main__":
    main()
