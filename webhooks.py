from typing import Dict, List


class WebhookCatalog:
    """Known trigger and action identifiers that can be enabled in settings."""

    def __init__(self):
        self._triggers: Dict[str, dict] = {}
        self._actions: Dict[str, dict] = {}

    def register_trigger(self, trigger: str, **meta) -> None:
        self._triggers[trigger] = {"trigger": trigger, **meta}

    def register_action(self, action: str, **meta) -> None:
        self._actions[action] = {"action": action, **meta}

    def list_triggers(self) -> List[dict]:
        return list(self._triggers.values())

    def list_actions(self) -> List[dict]:
        return list(self._actions.values())
