from crud.settings import OptionStore, delete_option, get_option, update_option
from settings_registry import ACTIVE_WEBHOOKS_KEY, SettingsRegistry
from webhooks import WebhookCatalog


def test_get_missing_option_returns_default(db_session):
    assert get_option(db_session, "missing") is None
    assert get_option(db_session, "missing", "fallback") == "fallback"


def test_update_option_inserts_then_overwrites(db_session):
    update_option(db_session, "wpwhpro_reset_data", "no")
    assert get_option(db_session, "wpwhpro_reset_data") == "no"

    update_option(db_session, "wpwhpro_reset_data", "yes")
    assert get_option(db_session, "wpwhpro_reset_data") == "yes"


def test_update_option_keeps_structured_values(db_session):
    value = {"triggers": {"post_create": {}}, "actions": {}}
    update_option(db_session, ACTIVE_WEBHOOKS_KEY, value)
    assert get_option(db_session, ACTIVE_WEBHOOKS_KEY) == value


def test_delete_option(db_session):
    update_option(db_session, "temporary", "x")
    assert delete_option(db_session, "temporary") is True
    assert delete_option(db_session, "temporary") is False
    assert get_option(db_session, "temporary") is None


def test_registry_reads_back_saved_values(db_session):
    catalog = WebhookCatalog()
    catalog.register_trigger("post_create")

    registry = SettingsRegistry(store=OptionStore(db_session), webhooks=catalog)
    registry.save({"wpwhpro_activate_authentication": "on", "wpwhpropt_post_create": "on"})

    reloaded = SettingsRegistry(store=OptionStore(db_session), webhooks=catalog)
    assert reloaded.get_settings()["wpwhpro_activate_authentication"].value == "yes"
    assert reloaded.get_settings()["wpwhpro_reset_data"].value == "no"
    assert reloaded.get_active_webhooks("triggers") == {"post_create": {}}
