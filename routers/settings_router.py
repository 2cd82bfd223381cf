from typing import Dict, Literal

from fastapi import APIRouter, Body, Depends, HTTPException
from sqlalchemy.orm import Session

from crud.settings import OptionStore
from db.database import get_db
from schemas.settings import (
    AuthenticationMethod,
    AuthTableSchema,
    FieldSchema,
    SettingsMeta,
    SettingsSaveResponse,
)
from settings_registry import SettingsRegistry
from dependencies import build_registry

router = APIRouter(prefix="/settings", tags=["settings"])


def get_registry(db: Session = Depends(get_db)) -> SettingsRegistry:
    return build_registry(OptionStore(db))


@router.get("", response_model=Dict[str, FieldSchema])
def get_general_settings(registry: SettingsRegistry = Depends(get_registry)):
    return registry.get_settings()


@router.post("", response_model=SettingsSaveResponse)
def save_settings(
    submitted: Dict[str, str] = Body(...), registry: SettingsRegistry = Depends(get_registry)
):
    success = registry.save(submitted)
    if not success:
        raise HTTPException(status_code=400, detail="No settings submitted")
    return SettingsSaveResponse(success=success)


@router.get("/required-trigger", response_model=Dict[str, FieldSchema])
def get_required_trigger_settings(registry: SettingsRegistry = Depends(get_registry)):
    return registry.get_required_trigger_settings()


@router.get("/default-trigger", response_model=Dict[str, FieldSchema])
def get_default_trigger_settings(registry: SettingsRegistry = Depends(get_registry)):
    return registry.get_default_trigger_settings()


@router.get("/required-action", response_model=Dict[str, FieldSchema])
def get_required_action_settings(registry: SettingsRegistry = Depends(get_registry)):
    return registry.get_required_action_settings()


@router.get("/authentication-methods", response_model=Dict[str, AuthenticationMethod])
def get_authentication_methods(registry: SettingsRegistry = Depends(get_registry)):
    return registry.get_authentication_methods()


@router.get("/authentication-table", response_model=AuthTableSchema)
def get_authentication_table(registry: SettingsRegistry = Depends(get_registry)):
    return registry.get_authentication_table_data()


@router.get("/active-webhooks")
def get_active_webhooks(
    type: Literal["all", "triggers", "actions"] = "all",
    registry: SettingsRegistry = Depends(get_registry),
):
    return registry.get_active_webhooks(type)


@router.get("/post-statuses", response_model=Dict[str, str])
def get_post_statuses(registry: SettingsRegistry = Depends(get_registry)):
    return registry.get_all_post_statuses()


@router.get("/meta", response_model=SettingsMeta)
def get_settings_meta(
    target: str = "main", registry: SettingsRegistry = Depends(get_registry)
):
    return SettingsMeta(
        admin_cap=registry.get_admin_cap(target),
        page_name=registry.get_page_name(),
        page_title=registry.get_page_title(),
        webhook_option_key=registry.get_webhook_option_key(),
        news_transient_key=registry.get_news_transient_key(),
        extensions_transient_key=registry.get_extensions_transient_key(),
        webhook_ident_param=registry.get_webhook_ident_param(),
        active_webhooks_ident=registry.get_active_webhooks_ident(),
        action_nonce=registry.get_action_nonce(),
    )


@router.get("/strings/{name}")
def get_default_string(name: str, registry: SettingsRegistry = Depends(get_registry)):
    return {"name": name, "value": registry.get_default_string(name)}
