import logging
import sys
from typing import Optional, Union
from apiforge.core.config import settings

CONTEXT_FIELDS = ("project_id", "stage")


class ContextFormatter(logging.Formatter):
    """Formatter for records that may carry project_id / stage extras."""
    def format(self, record):
        for name in CONTEXT_FIELDS:
            if not hasattr(record, name):
                setattr(record, name, "-")
        return super().format(record)


def configure_logging(level: Optional[Union[int, str]] = None) -> None:
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(ContextFormatter(
        "%(asctime)s %(levelname)s %(name)s [project_id=%(project_id)s stage=%(stage)s] - %(message)s"
    ))
    logging.basicConfig(
        level=level if level is not None else settings.log_level.upper(),
        handlers=[handler],
    )
    # SQL echo stays off unless explicitly requested
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
