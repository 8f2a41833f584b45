import logging
import threading
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Tuple

from jgdshift.services.engine import Transformer
from jgdshift.services.errors import ParameterSetNotFoundError
from jgdshift.services.formats import Format

logger = logging.getLogger(__name__)

# Encoding of the par files published by GSI.
PAR_ENCODING = "cp932"


class ParameterRegistry:
    """Named transformers kept in process memory.

    Transformers are immutable, so readers get them by reference; only the
    name table is guarded by the lock.
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._transformers: Dict[str, Transformer] = {}

    def register(self, name: str, transformer: Transformer) -> Transformer:
        with self._lock:
            replaced = name in self._transformers
            self._transformers[name] = transformer
        logger.info(
            "%s parameter set %r (%s, %d meshcodes)",
            "Replaced" if replaced else "Registered",
            name,
            transformer.format.value,
            len(transformer.parameter),
        )
        return transformer

    def load(
        self, name: str, format: Format, content: str, description: Optional[str] = None
    ) -> Transformer:
        transformer = Transformer.from_string(content, format, description)
        return self.register(name, transformer)

    def load_file(
        self, name: str, format: Format, path: str, encoding: str = PAR_ENCODING
    ) -> Transformer:
        content = Path(path).read_text(encoding=encoding)
        return self.load(name, format, content)

    def preload(self, entries: Iterable[Tuple[str, Format, str]]) -> List[str]:
        loaded: List[str] = []
        for name, format, path in entries:
            self.load_file(name, format, path)
            loaded.append(name)
        return loaded

    def get(self, name: str) -> Transformer:
        with self._lock:
            transformer = self._transformers.get(name)
        if transformer is None:
            raise ParameterSetNotFoundError(name)
        return transformer

    def remove(self, name: str) -> None:
        with self._lock:
            if self._transformers.pop(name, None) is None:
                raise ParameterSetNotFoundError(name)
        logger.info("Removed parameter set %r", name)

    def clear(self) -> None:
        with self._lock:
            self._transformers.clear()

    def names(self) -> List[str]:
        with self._lock:
            return sorted(self._transformers)

    def summary(self, name: str) -> Dict:
        return describe(name, self.get(name))

    def summaries(self) -> List[Dict]:
        with self._lock:
            items = sorted(self._transformers.items())
        return [describe(name, transformer) for name, transformer in items]


def describe(name: str, transformer: Transformer) -> Dict:
    return {
        "name": name,
        "format": transformer.format.value,
        "mesh_unit": transformer.mesh_unit().name,
        "description": transformer.description,
        "parameter_count": len(transformer.parameter),
    }


registry = ParameterRegistry()
