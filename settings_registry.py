"""
Settings registry for the webhook plugin.

Declares the admin-settable field schemas, the authentication templates and
the active-webhooks registry, loads current values from the option store and
writes them back on save. Every data group passes through a named filter hook
so extensions can add, remove or change entries without touching this module.
"""
import logging
import re
import unicodedata
from typing import Any, Callable, Dict, Mapping, Optional

from hooks import HookRegistry
from schemas.settings import (
    ActionNonce,
    ActiveWebhooks,
    AuthenticationMethod,
    AuthTableSchema,
    FieldSchema,
    FieldType,
)
from translation import PassthroughTranslator, Translator

logger = logging.getLogger(__name__)

ADMIN_CAP = "manage_options"
PAGE_NAME = "wp-webhooks-pro"
WEBHOOK_SETTINGS_KEY = "ironikus_webhook_webhooks"
NEWS_TRANSIENT_KEY = "ironikus_cached_news"
EXTENSIONS_TRANSIENT_KEY = "ironikus_cached_extensions"
WEBHOOK_IDENT_PARAM = "wpwhpro_action"
ACTIVE_WEBHOOKS_KEY = "wpwhpro_active_webhooks"
AUTH_TABLE_NAME = "wpwhpro_authentication"

TRIGGER_ENABLE_PREFIX = "wpwhpropt_"
ACTION_ENABLE_PREFIX = "wpwhpropa_"

NATIVE_POST_STATUSES = {
    "draft": "Draft",
    "pending": "Pending Review",
    "private": "Private",
    "publish": "Published",
}

_NON_ALNUM = re.compile(r"[^a-z0-9]+")


def sanitize_title(value: str) -> str:
    """Lowercase, strip accents and collapse everything else into hyphens."""
    if not value:
        return ""
    normalized = unicodedata.normalize("NFKD", value)
    ascii_only = normalized.encode("ascii", "ignore").decode("ascii")
    return _NON_ALNUM.sub("-", ascii_only.lower().strip()).strip("-")


def _is_empty(value: Any) -> bool:
    if isinstance(value, (list, dict)):
        return not value
    return value is None or value is False or value == "" or value == "0" or value == 0


class SettingsRegistry:
    def __init__(
        self,
        store,
        webhooks,
        translator: Optional[Translator] = None,
        hooks: Optional[HookRegistry] = None,
        order_statuses: Optional[Callable[[], Dict[str, str]]] = None,
        page_title: str = "WP Webhooks Pro",
    ):
        self.store = store
        self.webhooks = webhooks
        self.translator = translator or PassthroughTranslator()
        self.hooks = hooks or HookRegistry()
        self.order_statuses = order_statuses

        self.admin_cap = ADMIN_CAP
        self.page_name = PAGE_NAME
        self.page_title = page_title
        self.webhook_settings_key = WEBHOOK_SETTINGS_KEY
        self.news_transient_key = NEWS_TRANSIENT_KEY
        self.extensions_transient_key = EXTENSIONS_TRANSIENT_KEY
        self.webhook_ident_param = WEBHOOK_IDENT_PARAM
        self.active_webhook_ident_param = ACTIVE_WEBHOOKS_KEY

        self.default_settings = self._load_default_settings()
        self.required_trigger_settings = self._load_required_trigger_settings()
        self.default_trigger_settings = self._load_default_trigger_settings()
        self.required_action_settings = self._load_required_action_settings()
        self.authentication_methods = self._load_authentication_methods()
        self.authentication_table_data = self._setup_authentication_table_data()
        self.action_nonce = ActionNonce(
            action="ironikus_wpwhpro_actions", arg="ironikus_wpwhpro_actions_nonce"
        )
        self.trans_strings = self._load_default_strings()
        self.active_webhooks = self._setup_active_webhooks()

    def _t(self, text: str, context_key: str) -> str:
        return self.translator.translate(text, context_key)

    def _checkbox(
        self,
        field_id: str,
        label: str,
        description: str,
        context: str,
        tip_context: Optional[str] = None,
    ) -> FieldSchema:
        return FieldSchema(
            id=field_id,
            type=FieldType.CHECKBOX,
            label=self._t(label, context),
            description=self._t(description, tip_context or context),
        )

    # ------------------------------------------------------------------
    # Loaders
    # ------------------------------------------------------------------

    def _load_default_settings(self) -> Dict[str, FieldSchema]:
        fields = [
            self._checkbox(
                "wpwhpro_activate_authentication",
                "Activate Authentication",
                "This allows you to authenticate certain webhook triggers in case you want "
                "to send data to API that requires authentication. It will add a new tab "
                "within the menu",
                "wpwhpro-fields-activate-authentication",
                "wpwhpro-fields-activate-authentication-tip",
            ),
            self._checkbox(
                "wpwhpro_activate_translations",
                "Activate Translations",
                "Check this button if you want to enable our translation engine on your website.",
                "wpwhpro-fields-activate-translations",
                "wpwhpro-fields-translations-tip",
            ),
            self._checkbox(
                "wpwhpro_deactivate_post_delay",
                "Deactivate Post Trigger Delay",
                "Every trigger is delayed until the request shuts down, so modifications "
                "made after the initial trigger are tracked as well. Check this box to "
                "fire triggers immediately instead.",
                "wpwhpro-fields-reset",
                "wpwhpro-fields-reset-tip",
            ),
            self._checkbox(
                "wpwhpro_activate_debug_mode",
                "Activate Debug Mode",
                "Adds additional debug information, e.g. further details about "
                "configuration issues within the debug log.",
                "wpwhpro-fields-reset",
                "wpwhpro-fields-reset-tip",
            ),
            self._checkbox(
                "wpwhpro_reset_data",
                "Reset WP Webhooks",
                "Reset WP Webhooks and set it back to its default settings (Excludes "
                "license & Extensions). BE CAREFUL: Once you activate the button and click "
                "save, all of your saved data for the plugin is gone.",
                "wpwhpro-fields-reset",
                "wpwhpro-fields-reset-tip",
            ),
        ]

        settings = self.hooks.apply_filters(
            "settings/fields", {field.id: field for field in fields}
        )

        for field in settings.values():
            stored = self.store.get(field.id)
            if field.type == FieldType.CHECKBOX:
                if _is_empty(stored) or stored == "no":
                    field.value = "no"
                else:
                    field.value = "yes"
            else:
                field.value = "" if stored is None else str(stored)

        return settings

    def _load_required_trigger_settings(self) -> Dict[str, FieldSchema]:
        context = "wpwhpro-fields-trigger-required-settings"
        fields = {
            "wpwhpro_trigger_response_type": FieldSchema(
                id="wpwhpro_trigger_response_type",
                type=FieldType.SELECT,
                label=self._t("Change the data request type", context),
                choices={"json": "JSON", "xml": "XML", "form": "X-WWW-FORM-URLENCODE"},
                default_value="json",
                description=self._t(
                    "Set a custom request type for the data that gets send to the "
                    "specified URL. Default is JSON.",
                    context,
                ),
            ),
            "wpwhpro_trigger_request_method": FieldSchema(
                id="wpwhpro_trigger_request_method",
                type=FieldType.SELECT,
                label=self._t("Change the data request method", context),
                choices={
                    method: method
                    for method in ("POST", "GET", "HEAD", "PUT", "DELETE", "TRACE", "OPTIONS", "PATCH")
                },
                default_value="POST",
                description=self._t(
                    "Set a custom request method for the data that gets send to the "
                    "specified URL. Default is POST.",
                    context,
                ),
            ),
            # Real template choices are filled in by the page that renders the form
            "wpwhpro_trigger_authentication": FieldSchema(
                id="wpwhpro_trigger_authentication",
                type=FieldType.SELECT,
                label=self._t("Add authentication template", context),
                choices={"0": self._t("Choose...", context)},
                description=self._t(
                    "Set a custom authentication template in case the other endpoint "
                    "requires authentication.",
                    context,
                ),
            ),
            "wpwhpro_trigger_allow_unsafe_urls": self._checkbox(
                "wpwhpro_trigger_allow_unsafe_urls",
                "Allow unsafe URLs",
                "Activating this setting allows you to use unsafe looking URLs like "
                "zfvshjhfbssdf.szfdhdf.com.",
                context,
            ),
            "wpwhpro_trigger_allow_unverified_ssl": self._checkbox(
                "wpwhpro_trigger_allow_unverified_ssl",
                "Allow unverified SSL",
                "Activating this setting allows you to use unverified SSL connections "
                "for this URL (We won't verify the SSL for this webhook URL).",
                context,
            ),
        }
        return self.hooks.apply_filters("settings/required_trigger_settings", fields)

    def _load_default_trigger_settings(self) -> Dict[str, FieldSchema]:
        context = "wpwhpro-fields-trigger-settings"
        fields = {
            field.id: field
            for field in (
                self._checkbox(
                    "wpwhpro_user_must_be_logged_in",
                    "User must be logged in",
                    "Check this button if you want to fire this webhook only when the "
                    "user is logged in.",
                    context,
                ),
                self._checkbox(
                    "wpwhpro_user_must_be_logged_out",
                    "User must be logged out",
                    "Check this button if you want to fire this webhook only when the "
                    "user is logged out.",
                    context,
                ),
                self._checkbox(
                    "wpwhpro_trigger_backend_only",
                    "Trigger from backend only",
                    "Check this button if you want to fire this trigger only from the "
                    "backend. Every post submitted through the frontend is ignored.",
                    context,
                ),
                self._checkbox(
                    "wpwhpro_trigger_frontend_only",
                    "Trigger from frontend only",
                    "Check this button if you want to fire this trigger only from the "
                    "frontend. Every post submitted through the backend is ignored.",
                    context,
                ),
            )
        }
        return self.hooks.apply_filters("settings/default_trigger_settings", fields)

    def _load_required_action_settings(self) -> Dict[str, FieldSchema]:
        return self.hooks.apply_filters("settings/required_action_settings", {})

    def _text_field(self, field_id: str, label: str, description: str, context: str) -> FieldSchema:
        return FieldSchema(
            id=field_id,
            type=FieldType.TEXT,
            label=self._t(label, context),
            description=self._t(description, context),
        )

    def _load_authentication_methods(self) -> Dict[str, AuthenticationMethod]:
        context = "wpwhpro-fields-authentication-settings"
        api_key_fields = [
            self._text_field(
                "wpwhpro_auth_api_key_key",
                "Key",
                "Set the key you have to use to recognize the API key from the other endpoint.",
                context,
            ),
            self._text_field(
                "wpwhpro_auth_api_key_value",
                "Value",
                "This is the field you can include your API key.",
                context,
            ),
            FieldSchema(
                id="wpwhpro_auth_api_key_add_to",
                type=FieldType.SELECT,
                label=self._t("Add to", context),
                choices={
                    "header": self._t("Header", context),
                    "body": self._t("Body", context),
                    "both": self._t("Header & Body", context),
                },
                description=self._t(
                    "Choose where you want to place the API Key within the request.", context
                ),
            ),
        ]
        bearer_fields = [
            self._text_field(
                "wpwhpro_auth_bearer_token_token",
                "Token",
                'Add the bearer token you received from the other endpoint here. Please '
                'add only the token, without the "Bearer " in front.',
                context,
            ),
        ]
        basic_fields = [
            self._text_field(
                "wpwhpro_auth_basic_auth_username",
                "Username",
                "Add the username you want to use for the authentication.",
                context,
            ),
            self._text_field(
                "wpwhpro_auth_basic_auth_password",
                "Password",
                "Add the password you want to use for the authentication.",
                context,
            ),
        ]

        methods = {
            "api_key": AuthenticationMethod(
                key="api_key",
                name=self._t("API Key", context),
                description=self._t("Add an API key to your request header/body", context),
                fields={f.id: f for f in api_key_fields},
            ),
            "bearer_token": AuthenticationMethod(
                key="bearer_token",
                name=self._t("Bearer Token", context),
                description=self._t(
                    "Authenticate yourself on an external API using a Bearer token.", context
                ),
                fields={f.id: f for f in bearer_fields},
            ),
            "basic_auth": AuthenticationMethod(
                key="basic_auth",
                name=self._t("Basic Auth", context),
                description=self._t(
                    "Authenticate yourself on an external API using Basic Authentication.",
                    context,
                ),
                fields={f.id: f for f in basic_fields},
            ),
        }
        return self.hooks.apply_filters("settings/authentication_methods", methods)

    def _setup_authentication_table_data(self) -> AuthTableSchema:
        return AuthTableSchema(
            table_name=AUTH_TABLE_NAME,
            create_statement_template=(
                f"CREATE TABLE {{prefix}}{AUTH_TABLE_NAME} (\n"
                "  id BIGINT(20) unsigned NOT NULL AUTO_INCREMENT PRIMARY KEY,\n"
                "  name VARCHAR(100),\n"
                "  auth_type VARCHAR(100),\n"
                "  template LONGTEXT,\n"
                "  log_time DATETIME\n"
                ") {charset_collate};"
            ),
            drop_statement_template=f"DROP TABLE {{prefix}}{AUTH_TABLE_NAME};",
        )

    def _load_default_strings(self) -> Dict[str, str]:
        strings = {
            "sufficient-permissions": "You do not have sufficient permissions to access this page.",
        }
        return self.hooks.apply_filters("admin/default_strings", strings)

    def _setup_active_webhooks(self) -> ActiveWebhooks:
        stored = self.store.get(self.active_webhook_ident_param)
        if not stored or not isinstance(stored, dict):
            if stored:
                logger.debug("Ignoring malformed active webhooks value: %r", stored)
            return ActiveWebhooks()

        triggers = stored.get("triggers")
        actions = stored.get("actions")
        return ActiveWebhooks(
            triggers=triggers if isinstance(triggers, dict) else {},
            actions=actions if isinstance(actions, dict) else {},
        )

    # ------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------

    def get_admin_cap(self, target: str = "main") -> str:
        return self.hooks.apply_filters("admin/settings/capability", self.admin_cap, target)

    def get_page_name(self) -> str:
        return self.hooks.apply_filters("admin/settings/page_name", self.page_name)

    def get_page_title(self) -> str:
        return self.hooks.apply_filters("admin/settings/page_title", self.page_title)

    def get_authentication_table_data(self) -> AuthTableSchema:
        return self.hooks.apply_filters(
            "admin/settings/authentication_table_data", self.authentication_table_data
        )

    def get_webhook_option_key(self) -> str:
        return self.webhook_settings_key

    def get_news_transient_key(self) -> str:
        return self.news_transient_key

    def get_extensions_transient_key(self) -> str:
        return self.extensions_transient_key

    def get_webhook_ident_param(self) -> str:
        return self.hooks.apply_filters(
            "admin/settings/webhook_ident_param", self.webhook_ident_param
        )

    def get_action_nonce(self) -> ActionNonce:
        return self.action_nonce

    def get_settings(self) -> Dict[str, FieldSchema]:
        """Return the general settings keyed by field id.

        The mapping is a copy; the field objects are shared with the registry.
        """
        return dict(self.default_settings)

    def get_required_trigger_settings(self) -> Dict[str, FieldSchema]:
        return self.required_trigger_settings

    def get_default_trigger_settings(self) -> Dict[str, FieldSchema]:
        return self.default_trigger_settings

    def get_required_action_settings(self) -> Dict[str, FieldSchema]:
        return self.required_action_settings

    def get_authentication_methods(self) -> Dict[str, AuthenticationMethod]:
        return self.authentication_methods

    def get_active_webhooks_ident(self) -> str:
        return self.active_webhook_ident_param

    def get_active_webhooks(self, type: str = "all") -> dict:
        """Return the enabled triggers, actions, or both (any other type)."""
        if type == "triggers":
            return dict(self.active_webhooks.triggers)
        if type == "actions":
            return dict(self.active_webhooks.actions)
        return {
            "triggers": dict(self.active_webhooks.triggers),
            "actions": dict(self.active_webhooks.actions),
        }

    def get_default_string(self, name: str) -> str:
        if not name:
            return ""
        return self.trans_strings.get(name, "")

    def get_all_post_statuses(self) -> Dict[str, str]:
        statuses = {key: self._t(label, "post-statuses") for key, label in NATIVE_POST_STATUSES.items()}
        if self.order_statuses is not None:
            statuses.update(self.order_statuses())
        return self.hooks.apply_filters("admin/settings/get_all_post_statuses", statuses)

    # ------------------------------------------------------------------
    # Save
    # ------------------------------------------------------------------

    def _submitted_value(self, field: FieldSchema, submitted: Mapping[str, str]) -> str:
        present = field.id in submitted
        if field.type == FieldType.CHECKBOX:
            return "yes" if present else "no"
        if field.type == FieldType.TEXT:
            return sanitize_title(submitted[field.id]) if present else ""
        if present and field.choices and submitted[field.id] in field.choices:
            return submitted[field.id]
        return field.default_value

    def save(self, submitted: Mapping[str, str]) -> bool:
        if not submitted:
            logger.info("Ignoring settings save without submitted values")
            return False

        for name, field in self.default_settings.items():
            value = self._submitted_value(field, submitted)
            self.store.set(name, value)
            field.value = value

        triggers = self.active_webhooks.triggers
        for trigger in self.webhooks.list_triggers():
            trigger_id = trigger["trigger"]
            if TRIGGER_ENABLE_PREFIX + trigger_id in submitted:
                triggers.setdefault(trigger_id, {})
            else:
                triggers.pop(trigger_id, None)

        actions = self.active_webhooks.actions
        for action in self.webhooks.list_actions():
            action_id = action["action"]
            if ACTION_ENABLE_PREFIX + action_id in submitted:
                actions.setdefault(action_id, {})
            else:
                actions.pop(action_id, None)

        self.store.set(self.active_webhook_ident_param, self.active_webhooks.model_dump())
        logger.info(
            "Saved settings: %d triggers and %d actions active", len(triggers), len(actions)
        )

        self.hooks.do_action("admin/settings/settings_saved", submitted)
        return True
