"""
Shared pydantic configuration.
The external backend speaks camelCase JSON (medicineName, saleDate, _id);
records accept that as well as snake_case and serialise back to camelCase.
"""
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

class CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )
