"""Run the API with uvicorn"""

import uvicorn

from finance_tracker.config import settings


def main() -> None:
    # log_config=None keeps the JSON logging configured by the app
    uvicorn.run(
        "finance_tracker.api.main:app",
        host=settings.host,
        port=settings.port,
        log_config=None,
    )


if __name__ == "__main__":
    main()
