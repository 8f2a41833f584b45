import logging
import os
from typing import List, Tuple

from jgdshift.services.formats import Format

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def parse_par_files(value: str) -> List[Tuple[str, Format, str]]:
    """Parse ``name=Format:path`` entries separated by commas."""
    entries: List[Tuple[str, Format, str]] = []
    for item in value.split(","):
        item = item.strip()
        if not item:
            continue
        name, sep, rest = item.partition("=")
        format_name, sep2, path = rest.partition(":")
        if not sep or not sep2 or not name.strip() or not path.strip():
            raise ValueError(f"Invalid parameter file entry: {item!r}")
        try:
            format = Format(format_name.strip())
        except ValueError:
            raise ValueError(f"Unknown parameter format in entry: {item!r}") from None
        entries.append((name.strip(), format, path.strip()))
    return entries


class Settings:
    def __init__(self):
        self.log_level = os.getenv("JGDSHIFT_LOG_LEVEL", "INFO").upper()
        self.cors_origins = [
            origin.strip()
            for origin in os.getenv("JGDSHIFT_CORS_ORIGINS", "http://localhost:3000,*").split(",")
            if origin.strip()
        ]
        self.par_files = parse_par_files(os.getenv("JGDSHIFT_PAR_FILES", ""))
        self.max_trajectory_points = int(os.getenv("JGDSHIFT_MAX_TRAJECTORY_POINTS", "10000"))


def setup_logging(level: str = "INFO") -> None:
    logging.basicConfig(level=getattr(logging, level.upper(), logging.INFO), format=LOG_FORMAT)


settings = Settings()
