from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

LEVEL_PATTERN = r"^(A1|A2|B1|B2|C1|C2)$"


class CamelModel(BaseModel):
    """Wire models speak camelCase JSON and accept snake_case too."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class MessageOut(CamelModel):
    message: str
