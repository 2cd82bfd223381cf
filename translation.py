import json
import logging
from typing import Dict, Protocol

logger = logging.getLogger(__name__)


class Translator(Protocol):
    def translate(self, text: str, context_key: str) -> str:
        ...


class PassthroughTranslator:
    def translate(self, text: str, context_key: str) -> str:
        return text


class CatalogTranslator:
    """Looks up translations by context key, falling back to the source text."""

    def __init__(self, catalog: Dict[str, Dict[str, str]]):
        self.catalog = catalog

    @classmethod
    def from_file(cls, path: str) -> "CatalogTranslator":
        with open(path, encoding="utf-8") as fh:
            catalog = json.load(fh)
        logger.info("Loaded translation catalog from %s", path)
        return cls(catalog)

    def translate(self, text: str, context_key: str) -> str:
        return self.catalog.get(context_key, {}).get(text, text)
