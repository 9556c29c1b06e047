from typing import Generic, Optional, TypeVar
from pydantic import BaseModel
from pydantic.alias_generators import to_camel

T = TypeVar("T")


class CamelModel(BaseModel):
    """Wire JSON uses camelCase keys; Python code uses snake_case."""

    class Config:
        alias_generator = to_camel
        populate_by_name = True


class LocalizedText(BaseModel):
    id: str
    en: str = ""
    cn: str = ""


class SingleLocaleText(BaseModel):
    id: str


class LocalizedTextInput(BaseModel):
    id: Optional[str] = None
    en: Optional[str] = None
    cn: Optional[str] = None


class DataResponse(BaseModel, Generic[T]):
    data: T


class OkResponse(BaseModel):
    ok: bool = True
