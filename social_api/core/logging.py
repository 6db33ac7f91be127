# ============================================================================
# FILE: social_api/core/logging.py
# ============================================================================
import logging


def setup_logging(level: str = "INFO") -> None:
    """
    Configure the root logger.
    The console handler is attached once; the level is applied on every call
    so a later create_app() with other settings still takes effect.
    """
    root = logging.getLogger()
    root.setLevel(getattr(logging, level.upper(), logging.INFO))
    if root.handlers:
        return

    formatter = logging.Formatter(
        fmt="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)
    root.addHandler(console_handler)

    # SQLAlchemy echo is driven by DATABASE_ECHO, keep its logger quiet otherwise
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
