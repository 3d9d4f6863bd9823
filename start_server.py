#!/usr/bin/env python3
"""Start the API with uvicorn, honoring the PORT environment variable."""

import logging
import os
import sys

import uvicorn

logger = logging.getLogger("fieldroute.start_server")


def main() -> int:
    logging.basicConfig(level=os.environ.get("LOG_LEVEL", "INFO").upper())

    port = os.environ.get("PORT", "8000")
    try:
        port_int = int(port)
    except ValueError:
        logger.warning("Invalid PORT value '%s', using default 8000", port)
        port_int = 8000

    src_path = os.path.join(os.path.dirname(os.path.abspath(__file__)), "src")
    if os.path.isdir(src_path) and src_path not in sys.path:
        sys.path.insert(0, src_path)

    logger.info("Starting server on port %d", port_int)
    uvicorn.run(
        "fieldroute.main:app",
        host="0.0.0.0",
        port=port_int,
        proxy_headers=True,
        forwarded_allow_ips="*",
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())
