"""Run the live relay server: ``python -m f1relay``."""

from __future__ import annotations

import argparse

import uvicorn

from f1relay.api_logging import configure_logging
from f1relay.config import get_settings
from f1relay.server import create_app


def main() -> None:
    settings = get_settings()
    parser = argparse.ArgumentParser(description="F1 live timing relay")
    parser.add_argument("--host", default=settings.host)
    parser.add_argument("--port", type=int, default=settings.port)
    parser.add_argument("--log-level", default=settings.log_level)
    args = parser.parse_args()

    configure_logging(args.log_level, settings.api_log_file)
    app = create_app(settings)
    uvicorn.run(app.asgi, host=args.host, port=args.port, log_level=args.log_level.lower())


if __name__ == "__main__":
    main()
