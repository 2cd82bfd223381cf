import os


class Config:
    DATABASE_URL = os.environ.get(
        "WEBHOOK_SETTINGS_DATABASE_URL", "sqlite:///./webhook_settings.db"
    )
    PAGE_TITLE = os.environ.get("WEBHOOK_SETTINGS_PAGE_TITLE", "WP Webhooks Pro")
    LOG_LEVEL = os.environ.get("WEBHOOK_SETTINGS_LOG_LEVEL", "INFO")

    # Optional JSON file: {"<context_key>": {"<text>": "<translation>"}}
    TRANSLATIONS_PATH = os.environ.get("WEBHOOK_SETTINGS_TRANSLATIONS")


config = Config()
