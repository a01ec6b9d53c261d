"""
Runtime configuration read from the environment.

Environment variables (a local .env file is loaded if present):
    LOG_LEVEL            - logging level (default: INFO)
    SUGGESTION_PROVIDER  - auto | heuristic | openai | off (default: auto)
    OPENAI_API_KEY       - enables the OpenAI suggestion provider under "auto"
    OPENAI_MODEL         - model used for rule suggestions (default: gpt-4o-mini)
    APP_TITLE            - browser/page title (default: Schema Workbench)
"""

import logging
import os

from dotenv import load_dotenv

load_dotenv()

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
SUGGESTION_PROVIDERS = ("auto", "heuristic", "openai", "off")


def get_log_level() -> str:
    return os.getenv("LOG_LEVEL", "INFO").upper()


def get_suggestion_provider() -> str:
    provider = os.getenv("SUGGESTION_PROVIDER", "auto").strip().lower()
    if provider not in SUGGESTION_PROVIDERS:
        logging.getLogger(__name__).warning("Unknown SUGGESTION_PROVIDER '%s', using 'auto'", provider)
        return "auto"
    if provider == "auto":
        return "openai" if os.getenv("OPENAI_API_KEY") else "heuristic"
    return provider


def get_openai_model() -> str:
    return os.getenv("OPENAI_MODEL", "gpt-4o-mini")


def get_app_title() -> str:
    return os.getenv("APP_TITLE", "Schema Workbench")


def configure_logging() -> None:
    logging.basicConfig(level=get_log_level(), format=LOG_FORMAT)
