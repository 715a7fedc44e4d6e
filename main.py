"""LexaLab Phrase Coach API - Entry Point"""

import sys
import logging
import signal

from app_modules.app_factory import create_app
from config import Config

LOG_LEVEL = Config.LOG_LEVEL
ENVIRONMENT = Config.ENVIRONMENT

logging.basicConfig(
    level=getattr(logging, LOG_LEVEL, logging.INFO),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    handlers=[logging.StreamHandler(sys.stdout)]
)
logger = logging.getLogger(__name__)

app = None


def signal_handler(signum, frame):
    logger.info(f"Received signal {signum}, shutting down gracefully...")
    sys.exit(0)


def initialize_application():
    global app
    logger.info("Initializing application...")
    app = create_app(Config)
    logger.info("Application ready")
    return True


def main():
    signal.signal(signal.SIGTERM, signal_handler)
    signal.signal(signal.SIGINT, signal_handler)

    logger.info("=" * 50)
    logger.info(f"LexaLab Phrase Coach API - {ENVIRONMENT.upper()}")
    logger.info("=" * 50)

    if not initialize_application():
        logger.error("Initialization failed")
        sys.exit(1)

    logger.info(f"✅ LexaLab API running on http://localhost:{Config.PORT}")

    try:
        app.run(host=Config.HOST, port=Config.PORT, debug=Config.DEBUG)
    except KeyboardInterrupt:
        logger.info("Stopped by user")
        sys.exit(0)
    except Exception as e:
        logger.error(f"Startup failed: {e}")
        sys.exit(1)


if __name__ == '__main__':
    main()
else:
    logger.info(f"Initializing for WSGI - {ENVIRONMENT}")
    try:
        if not initialize_application():
            raise RuntimeError("Initialization failed")
        logger.info(f"Ready on {Config.HOST}:{Config.PORT}")
    except Exception as e:
        logger.error(f"Fatal error: {e}", exc_info=True)
        raise
    application = app
