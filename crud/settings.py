import json
import logging
from typing import Any
from sqlalchemy.orm import Session
from models.settings import Option

logger = logging.getLogger(__name__)


def _find_option(db: Session, key: str) -> Option | None:
    return db.query(Option).filter(Option.key == key).first()


def get_option(db: Session, key: str, default: Any = None) -> Any:
    option = _find_option(db, key)
    if option is None:
        return default
    return json.loads(option.value)


def update_option(db: Session, key: str, value: Any) -> None:
    option = _find_option(db, key)
    encoded = json.dumps(value)
    if option is None:
        option = Option(key=key, value=encoded)
        db.add(option)
    else:
        option.value = encoded
    db.commit()
    logger.debug("Updated option %s", key)


def delete_option(db: Session, key: str) -> bool:
    option = _find_option(db, key)
    if option is None:
        return False
    db.delete(option)
    db.commit()
    return True


class OptionStore:
    """Key/value view over the options table, bound to one session."""

    def __init__(self, db: Session):
        self.db = db

    def get(self, key: str) -> Any:
        return get_option(self.db, key)

    def set(self, key: str, value: Any) -> None:
        update_option(self.db, key, value)
