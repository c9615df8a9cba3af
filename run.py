import logging
import os

import uvicorn

from nutricatalog.core.config import load_settings

# Setup basic logging for run.py
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s | %(levelname)-8s | %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S"
)
logger = logging.getLogger(__name__)


def run():
    settings = load_settings()
    port = int(os.getenv("PORT", "5000"))
    logger.info(f"Starting nutrition catalog on http://localhost:{port} ({settings.environment})")
    uvicorn.run(
        "nutricatalog.main:app",
        host=os.getenv("HOST", "0.0.0.0"),
        port=port,
        reload=settings.is_development,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    run()
