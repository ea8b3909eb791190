"""Shared Pydantic base for API schemas."""
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """
    Base schema whose JSON field names are camelCase.

    Python attributes stay snake_case. Input accepts either spelling and
    FastAPI serializes responses by alias.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )
