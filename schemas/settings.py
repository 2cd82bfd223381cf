from enum import Enum
from typing import Dict, Optional
from pydantic import BaseModel, ConfigDict, Field


class FieldType(str, Enum):
    CHECKBOX = "checkbox"
    TEXT = "text"
    SELECT = "select"


class FieldSchema(BaseModel):
    id: str
    type: FieldType
    label: str
    description: str = ""
    placeholder: str = ""
    required: bool = False
    choices: Optional[Dict[str, str]] = None
    default_value: str = ""
    value: str = ""


class AuthenticationMethod(BaseModel):
    key: str
    name: str
    description: str = ""
    fields: Dict[str, FieldSchema] = Field(default_factory=dict)


class ActiveWebhooks(BaseModel):
    triggers: Dict[str, dict] = Field(default_factory=dict)
    actions: Dict[str, dict] = Field(default_factory=dict)


class ActionNonce(BaseModel):
    model_config = ConfigDict(frozen=True)

    action: str
    arg: str


class AuthTableSchema(BaseModel):
    table_name: str
    create_statement_template: str
    drop_statement_template: str

    def render_create(self, prefix: str = "", charset_collate: str = "") -> str:
        return self.create_statement_template.format(
            prefix=prefix, charset_collate=charset_collate
        )

    def render_drop(self, prefix: str = "") -> str:
        return self.drop_statement_template.format(prefix=prefix)


class SettingsSaveResponse(BaseModel):
    success: bool


class SettingsMeta(BaseModel):
    admin_cap: str
    page_name: str
    page_title: str
    webhook_option_key: str
    news_transient_key: str
    extensions_transient_key: str
    webhook_ident_param: str
    active_webhooks_ident: str
    action_nonce: ActionNonce
