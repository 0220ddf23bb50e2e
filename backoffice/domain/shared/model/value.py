from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class ValueObject(BaseModel):
    model_config = ConfigDict(frozen=True)


class CamelValueObject(ValueObject):
    """Immutable record exchanged with the REST API in camelCase."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)
