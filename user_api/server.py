import argparse
import logging
from typing import List, Optional

import uvicorn

from user_api.core.config import get_settings

logger = logging.getLogger("user-api")


def main(argv: Optional[List[str]] = None) -> int:
    settings = get_settings()

    parser = argparse.ArgumentParser(description="user-api HTTP server")
    parser.add_argument("--host", type=str, default=settings.HOST)
    parser.add_argument("--port", type=int, default=settings.PORT)
    parser.add_argument("--log-level", type=str, default=settings.LOG_LEVEL)
    args = parser.parse_args(argv)

    level = getattr(logging, str(args.log_level).upper(), logging.INFO)
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )

    logger.info("starting user-api env=%s host=%s port=%s", settings.ENV, args.host, args.port)
    uvicorn.run(
        "user_api.main:create_app",
        factory=True,
        host=args.host,
        port=args.port,
        log_level=logging.getLevelName(level).lower(),
    )
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
