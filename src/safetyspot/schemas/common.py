"""Shared schema base classes and the response envelope."""

from typing import Generic, Optional, TypeVar

from pydantic import BaseModel
from pydantic.alias_generators import to_camel

DataT = TypeVar("DataT")


class CamelModel(BaseModel):
    """Snake-case attributes, camelCase on the wire."""

    class Config:
        alias_generator = to_camel
        populate_by_name = True
        from_attributes = True


class ApiResponse(BaseModel, Generic[DataT]):
    """Success envelope returned by every endpoint."""

    status: str = "success"
    data: Optional[DataT] = None


class ErrorResponse(BaseModel):
    status: str = "error"
    message: str


class Message(CamelModel):
    message: str
