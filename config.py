import os
import logging
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv

logger = logging.getLogger(__name__)

LOG_FORMAT = '%(asctime)s - %(levelname)s - %(message)s'


def _get_int(name: str, default: Optional[int]) -> Optional[int]:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError:
        logger.warning(f"Ignoring invalid integer for {name}: {raw!r}")
        return default


@dataclass
class Settings:
    """Runtime settings read from the environment."""
    log_level: str = 'INFO'
    log_file: str = 'fs_generator.log'
    random_seed: Optional[int] = None
    id_prefix: str = 'FS'
    id_width: int = 3
    port: int = 8000


def load_settings() -> Settings:
    """Load settings from .env and the process environment."""
    load_dotenv()

    id_width = _get_int('FS_ID_WIDTH', 3)
    if id_width is None or id_width < 1:
        logger.warning("FS_ID_WIDTH must be positive, using 3")
        id_width = 3

    return Settings(
        log_level=os.getenv('FS_LOG_LEVEL', 'INFO').upper(),
        log_file=os.getenv('FS_LOG_FILE', 'fs_generator.log'),
        random_seed=_get_int('FS_RANDOM_SEED', None),
        id_prefix=os.getenv('FS_ID_PREFIX', 'FS'),
        id_width=id_width,
        port=_get_int('PORT', 8000),
    )


def configure_logging(settings: Optional[Settings] = None, debug: bool = False):
    """Install the file + console handlers used by the entry points."""
    settings = settings or load_settings()
    level = logging.DEBUG if debug else getattr(logging, settings.log_level, logging.INFO)

    handlers = [logging.StreamHandler()]
    if settings.log_file:
        handlers.insert(0, logging.FileHandler(settings.log_file))

    logging.basicConfig(
        level=level,
        format=LOG_FORMAT,
        handlers=handlers,
        force=True
    )
