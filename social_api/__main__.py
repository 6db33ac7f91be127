# ============================================================================
# FILE: social_api/__main__.py
# ============================================================================
"""
Run the API with uvicorn:

    python -m social_api
"""
import uvicorn
from social_api.config import get_settings


def main() -> None:
    settings = get_settings()
    uvicorn.run(
        "social_api.main:app",
        host=settings.HOST,
        port=settings.PORT,
        log_level=settings.LOG_LEVEL.lower(),
    )


if __name__ == "__main__":
    main()
