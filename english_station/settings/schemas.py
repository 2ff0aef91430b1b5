from typing import Any

from ..shared.schemas import CamelModel


class SettingsUpdateIn(CamelModel):
    settings: dict[str, Any]
