"""Run the region site API with uvicorn.

Run with:  python3 serve.py [--host 0.0.0.0] [--port 8000] [--seed]
"""

from __future__ import annotations

import argparse
import os

import uvicorn

from api.observability import configure_logging
from core.config import get_settings


def main() -> None:
    parser = argparse.ArgumentParser(description="Region site API server")
    parser.add_argument("--host", default=os.getenv("HOST", "127.0.0.1"))
    parser.add_argument("--port", type=int, default=int(os.getenv("PORT", "8000")))
    parser.add_argument("--seed", action="store_true", help="migrate and seed demo data before serving")
    args = parser.parse_args()

    settings = get_settings()
    configure_logging(settings.log_level)
    if args.seed:
        from db.seed import main as seed_main

        seed_main()

    # log_config=None keeps uvicorn on the JSON handler installed above
    uvicorn.run("api.main:app", host=args.host, port=args.port, log_config=None, log_level=settings.log_level.lower())


if __name__ == "__main__":
    main()
