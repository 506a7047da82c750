"""Shared schema base classes."""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class ApiModel(BaseModel):
    """Base model serialised with camelCase keys for the web client.

    Python code uses snake_case attribute names; inputs are accepted in either form.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class FrozenApiModel(ApiModel):
    """Immutable variant of ``ApiModel``."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)
