"""Run the milk tracker API with uvicorn."""

import uvicorn

from milk_tracker.api.app import create_app
from milk_tracker.config import Settings
from milk_tracker.containers import build_container


def main() -> None:
    """Start the HTTP server on the configured host and port."""
    settings = Settings()
    app = create_app(build_container(settings))
    print(f"Milk Tracker running on http://localhost:{settings.port}/ui")
    uvicorn.run(app, host=settings.host, port=settings.port)


if __name__ == "__main__":
    main()
