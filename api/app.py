import logging

from dotenv import load_dotenv

from statsproxy.config import load_settings
from statsproxy.logging import configure_logging
from statsproxy.server import create_app

# --- Load environment variables from .env ---
load_dotenv()

settings = load_settings(dotenv=False)
configure_logging(level=settings.log_level)

logger = logging.getLogger("statsproxy.standalone")

app = create_app(settings)


def run(settings, server=None):
    """Serve ``server`` (the module app by default); raises ConfigurationError on a broken HTTPS setup."""
    missing = settings.missing_base_vars()
    if missing:
        logger.warning("Missing required env vars: %s", ", ".join(missing))

    ssl_context = None
    scheme = "http"
    if settings.use_https:
        ssl_context = settings.ssl_files()
        scheme = "https"

    server = server or app
    logger.info("Server running at %s://localhost:%s", scheme, settings.port)
    server.run(host="0.0.0.0", port=settings.port, ssl_context=ssl_context)


if __name__ == "__main__":
    run(settings)
