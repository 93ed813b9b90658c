import datetime
import typing

import pydantic

from prepforge.utilities.formatters.datetime_formatter import format_datetime_into_isoformat
from prepforge.utilities.formatters.field_formatter import format_dict_key_to_camel_case

DataT = typing.TypeVar("DataT")


class BaseSchemaModel(pydantic.BaseModel):
    model_config = pydantic.ConfigDict(
        from_attributes=True,
        validate_assignment=True,
        populate_by_name=True,
        json_encoders={datetime.datetime: format_datetime_into_isoformat},
        alias_generator=format_dict_key_to_camel_case,
    )


class SuccessResponse(BaseSchemaModel, typing.Generic[DataT]):
    success: bool = True
    data: DataT


class ErrorDetail(BaseSchemaModel):
    field: str
    message: str


class ErrorResponse(BaseSchemaModel):
    success: bool = False
    error: str
    message: str | None = None
    details: list[ErrorDetail] | None = None
