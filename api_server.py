"""API server entry point."""

from __future__ import annotations

import logging
import sys

import uvicorn

from lyricflow.api.routes import create_app
from lyricflow.config import API_KEY, HOST, LOG_LEVEL, MODEL_FAST, MODEL_QUALITY, PORT

logging.basicConfig(
    level=LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    stream=sys.stderr,
)
log = logging.getLogger(__name__)


def main() -> None:
    """Run the API server."""
    if not API_KEY:
        log.warning("OPENROUTER_API_KEY is not set; requests must carry api_key or use_mock")
    log.info("Models: fast=%s quality=%s", MODEL_FAST, MODEL_QUALITY)
    uvicorn.run(create_app(), host=HOST, port=PORT, log_level=LOG_LEVEL.lower())


if __name__ == "__main__":
    main()
