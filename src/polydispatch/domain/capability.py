"""Capability - the operation contract every variant of a context implements."""
from typing import Any, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator


def _type_name(value: Any) -> str:
    return getattr(value, "__name__", repr(value))


class Capability(BaseModel):
    """
    Named operation signature.

    Two capabilities are compatible when name, input types and output type are
    all equal; the registry uses that equality to decide whether a redefinition
    is harmless or a conflict.
    """
    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    name: str
    input_types: Tuple[Any, ...] = Field(default_factory=tuple)
    output_type: Any = object

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("Capability name must not be empty")
        return v.strip()

    @property
    def arity(self) -> int:
        return len(self.input_types)

    def is_compatible_with(self, other: "Capability") -> bool:
        return (
            self.name == other.name
            and self.input_types == other.input_types
            and self.output_type == other.output_type
        )

    def describe(self) -> str:
        params = ", ".join(_type_name(t) for t in self.input_types)
        return f"{self.name}({params}) -> {_type_name(self.output_type)}"

    def __str__(self) -> str:
        return self.describe()
