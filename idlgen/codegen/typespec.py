"""
Type descriptors and Go type references.

The IDL front end produces TypeSpec values; the generator only needs
their names and container element types to name definitions and to
write references to them.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Tuple

from ..utils.naming import go_case


class FieldRequired(Enum):
    """Whether a field or parameter always carries a value."""
    REQUIRED = "required"
    OPTIONAL = "optional"

    @classmethod
    def from_bool(cls, required: bool) -> FieldRequired:
        if not isinstance(required, bool):
            raise TypeError(f"required() expects a bool, got {type(required).__name__}")
        return cls.REQUIRED if required else cls.OPTIONAL


class TypeSpec:
    """Base class for all type descriptors."""

    name: str

    @property
    def is_user_type(self) -> bool:
        return False


# Go spelling of each IDL primitive
PRIMITIVE_GO_TYPES = {
    "bool": "bool",
    "byte": "int8",
    "i8": "int8",
    "i16": "int16",
    "i32": "int32",
    "i64": "int64",
    "double": "float64",
    "string": "string",
    "binary": "[]byte",
}


@dataclass(frozen=True)
class PrimitiveSpec(TypeSpec):
    name: str

    def __post_init__(self):
        if self.name not in PRIMITIVE_GO_TYPES:
            raise ValueError(f"Unknown primitive type: {self.name!r}")


@dataclass(frozen=True)
class ListSpec(TypeSpec):
    value: TypeSpec

    @property
    def name(self) -> str:
        return f"list<{self.value.name}>"


@dataclass(frozen=True)
class SetSpec(TypeSpec):
    value: TypeSpec

    @property
    def name(self) -> str:
        return f"set<{self.value.name}>"


@dataclass(frozen=True)
class MapSpec(TypeSpec):
    key: TypeSpec
    value: TypeSpec

    @property
    def name(self) -> str:
        return f"map<{self.key.name}, {self.value.name}>"


@dataclass(frozen=True)
class UserTypeSpec(TypeSpec):
    """A type declared in the IDL rather than built in."""
    name: str

    @property
    def is_user_type(self) -> bool:
        return True


@dataclass(frozen=True)
class TypedefSpec(UserTypeSpec):
    target: Optional[TypeSpec] = None


@dataclass(frozen=True)
class EnumSpec(UserTypeSpec):
    items: Tuple[Tuple[str, int], ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class StructSpec(UserTypeSpec):
    fields: Tuple[Tuple[str, TypeSpec, bool], ...] = field(default_factory=tuple)


BOOL = PrimitiveSpec("bool")
BYTE = PrimitiveSpec("byte")
I8 = PrimitiveSpec("i8")
I16 = PrimitiveSpec("i16")
I32 = PrimitiveSpec("i32")
I64 = PrimitiveSpec("i64")
DOUBLE = PrimitiveSpec("double")
STRING = PrimitiveSpec("string")
BINARY = PrimitiveSpec("binary")


def type_decl_name(spec: TypeSpec) -> str:
    """Name used in Go code to define a user-declared type."""
    if not isinstance(spec, TypeSpec):
        raise TypeError(f"def_name expects a TypeSpec, got {type(spec).__name__}")
    if not spec.is_user_type:
        raise TypeError(f"def_name expects a user-declared type, got {spec.name!r}")
    return go_case(spec.name)


def is_reference_type(spec: TypeSpec) -> bool:
    """Whether the Go form of the type is already nilable (slices and maps)."""
    if isinstance(spec, (ListSpec, SetSpec, MapSpec)):
        return True
    if isinstance(spec, TypedefSpec) and spec.target is not None:
        return is_reference_type(spec.target)
    return isinstance(spec, PrimitiveSpec) and spec.name == "binary"


def _base_reference(spec: TypeSpec) -> str:
    if isinstance(spec, PrimitiveSpec):
        return PRIMITIVE_GO_TYPES[spec.name]
    if isinstance(spec, ListSpec):
        return "[]" + _base_reference(spec.value)
    if isinstance(spec, SetSpec):
        return f"map[{_base_reference(spec.value)}]struct{{}}"
    if isinstance(spec, MapSpec):
        return f"map[{_base_reference(spec.key)}]{_base_reference(spec.value)}"
    if isinstance(spec, UserTypeSpec):
        return type_decl_name(spec)
    raise TypeError(f"type_reference expects a TypeSpec, got {type(spec).__name__}")


def type_reference(spec: TypeSpec, required: FieldRequired) -> str:
    """
    Go text that refers to a type from a field or parameter.

    Optional values are wrapped in a pointer unless the Go type is
    already nilable, so the required and optional forms differ only by
    the leading '*'.
    """
    if not isinstance(required, FieldRequired):
        raise TypeError(
            f"type_reference expects Required() or Optional(), got {type(required).__name__}"
        )

    reference = _base_reference(spec)
    if required is FieldRequired.OPTIONAL and not is_reference_type(spec):
        return "*" + reference
    return reference
