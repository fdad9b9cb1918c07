from __future__ import annotations

from collections.abc import Mapping
from typing import TypeVar

from pydantic import BaseModel, Field, field_validator


TBaseSchema = TypeVar("TBaseSchema", bound="BaseSchema")


class BaseSchema(BaseModel):
    def to_json(self) -> str:
        return self.model_dump_json()

    def to_dict(self) -> dict[str, object]:
        return self.model_dump()

    @classmethod
    def from_json(cls: type[TBaseSchema], data: str) -> TBaseSchema:
        return cls.model_validate_json(data)

    @classmethod
    def from_dict(cls: type[TBaseSchema], data: Mapping[str, object]) -> TBaseSchema:
        return cls.model_validate(data)


class StoreConfig(BaseSchema):
    db_path: str = Field(default="results/results.db", min_length=1)

    @field_validator("db_path")
    @classmethod
    def db_path_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("db_path must not be blank")
        return value
