"""
IR (Intermediate Representation) node definitions.

These nodes describe the class model inferred from JSON samples: classes,
fields, inferred types, optionality and nesting. They are handed to a
backend for code emission and are never mutated after the build.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from ..json_ast.nodes import JsonValue


class JsonType(Enum):
    """Classification tag of a single non-null JSON value."""

    BOOL = "bool"
    INT = "int"
    FLOAT = "float"
    STRING = "string"
    OBJECT = "object"
    ARRAY = "array"


SCALAR_TYPES = frozenset({JsonType.BOOL, JsonType.INT, JsonType.FLOAT, JsonType.STRING})


class TypeKind(Enum):
    """Kind of an inferred field type."""

    SCALAR = "scalar"  # bool, int, float, string
    CLASS = "class"  # A generated class
    ARRAY = "array"  # list[T]
    MIXED = "mixed"  # Could not be resolved to one type


class FormatHint(Enum):
    """Advisory string format detected from a sample value."""

    EMAIL = "email"
    URL = "url"
    UUID = "uuid"
    DATE_TIME = "date-time"
    DATE = "date"
    IP = "ip"


@dataclass(frozen=True)
class InferredType:
    """A resolved field type."""

    kind: TypeKind = TypeKind.MIXED

    # For SCALAR
    scalar: JsonType | None = None

    # For CLASS: identity path and generated name of the referenced class
    class_path: str = ""
    class_name: str = ""

    # For ARRAY: element type
    item: InferredType | None = None

    @staticmethod
    def mixed() -> InferredType:
        return InferredType(kind=TypeKind.MIXED)

    @staticmethod
    def scalar_of(tag: JsonType) -> InferredType:
        if tag not in SCALAR_TYPES:
            raise ValueError(f"{tag} is not a scalar type")
        return InferredType(kind=TypeKind.SCALAR, scalar=tag)

    @staticmethod
    def class_ref(node: ClassNode) -> InferredType:
        return InferredType(kind=TypeKind.CLASS, class_path=node.path, class_name=node.name)

    @staticmethod
    def array_of(item: InferredType) -> InferredType:
        return InferredType(kind=TypeKind.ARRAY, item=item)

    @property
    def is_mixed(self) -> bool:
        return self.kind == TypeKind.MIXED


@dataclass(frozen=True)
class FieldDescriptor:
    """A field of a generated class."""

    original_key: str = ""  # Key as it appears in the JSON samples
    name: str = ""  # Normalized identifier
    type: InferredType = field(default_factory=InferredType.mixed)
    optional: bool = False
    needs_mapping: bool = False
    format_hint: FormatHint | None = None


@dataclass(frozen=True)
class ClassNode:
    """A generated class.

    ``path`` is the dot-joined chain of normalized field names leading to
    this class from the root (empty for the root) and is its identity.
    """

    path: str = ""
    name: str = ""
    fields: tuple[FieldDescriptor, ...] = ()
    children: tuple[ClassNode, ...] = ()

    def get_field(self, name: str) -> FieldDescriptor | None:
        for field_desc in self.fields:
            if field_desc.name == name:
                return field_desc
        return None

    @property
    def field_names(self) -> list[str]:
        return [f.name for f in self.fields]


@dataclass
class MergeStats:
    """Per-key statistics collected over a set of sibling object samples."""

    present_count: int = 0
    total_samples: int = 0
    nullable_seen: bool = False
    values: list[JsonValue] = field(default_factory=list)  # Non-null values in first-seen order

    @property
    def always_present(self) -> bool:
        return self.present_count >= self.total_samples


@dataclass(frozen=True)
class IR:
    """The complete Intermediate Representation of one build."""

    root: ClassNode = field(default_factory=ClassNode)

    # Every class, nested classes before the classes referencing them
    classes: tuple[ClassNode, ...] = ()

    # Global flags for the renderer
    strict_typing: bool = True
    all_optional: bool = False

    # Whether the IR was built from several merged samples
    multipart: bool = False

    @property
    def root_name(self) -> str:
        return self.root.name

    def get_class(self, name: str) -> ClassNode | None:
        for class_node in self.classes:
            if class_node.name == name:
                return class_node
        return None
