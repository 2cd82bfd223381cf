import logging
from functools import lru_cache

from config import config
from hooks import HookRegistry
from settings_registry import SettingsRegistry
from translation import CatalogTranslator, PassthroughTranslator
from webhooks import WebhookCatalog

logger = logging.getLogger(__name__)

# Process-wide extension points and webhook catalog; registries are built per request.
hooks = HookRegistry()
webhook_catalog = WebhookCatalog()
order_statuses = None


@lru_cache(maxsize=1)
def _catalog_translator() -> CatalogTranslator:
    return CatalogTranslator.from_file(config.TRANSLATIONS_PATH)


def get_translator(store):
    if config.TRANSLATIONS_PATH and store.get("wpwhpro_activate_translations") == "yes":
        return _catalog_translator()
    return PassthroughTranslator()


def build_registry(store) -> SettingsRegistry:
    return SettingsRegistry(
        store=store,
        webhooks=webhook_catalog,
        translator=get_translator(store),
        hooks=hooks,
        order_statuses=order_statuses,
        page_title=config.PAGE_TITLE,
    )
