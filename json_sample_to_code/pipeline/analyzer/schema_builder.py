"""
Schema builder that turns JSON samples into IR.

Phase 2 of the pipeline: infer field types, merge multipart samples and
build the tree of nested classes, ready for code generation.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass, field

from ..config import CodeGeneratorConfig
from ..json_ast.nodes import JsonArray, JsonNull, JsonObject, JsonString, JsonValue
from .field_merger import has_consistent_structure, merge_objects
from .format_hints import detect_format
from .ir_nodes import (
    IR,
    ClassNode,
    FieldDescriptor,
    FormatHint,
    InferredType,
    JsonType,
    MergeStats,
)
from .name_normalizer import (
    DEFAULT_ROOT_NAME,
    NameRegistry,
    build_class_name,
    join_path,
    needs_mapping,
    normalize_field_name,
)
from .type_unifier import unify_many

logger = logging.getLogger(__name__)

# Classes nested deeper than this degrade to Mixed
MAX_NESTING_DEPTH = 50


@dataclass
class _BuildContext:
    """State owned by one top-level build call."""

    multipart: bool = False

    # Generated classes, nested classes before their parents
    registry: list[ClassNode] = field(default_factory=list)

    class_names: NameRegistry = field(default_factory=lambda: NameRegistry("class name"))


@dataclass
class _ClassScope:
    """Per-class state while its fields are resolved."""

    path: str
    depth: int
    field_names: NameRegistry = field(default_factory=lambda: NameRegistry("field name"))
    fields: list[FieldDescriptor] = field(default_factory=list)
    children: list[ClassNode] = field(default_factory=list)


class SchemaBuilder:
    """Builds the class model from one sample or a set of merged samples."""

    def __init__(self, config: CodeGeneratorConfig | None = None):
        """
        Initialize the builder.

        Args:
            config: Code generation configuration (only ``typed`` and
                ``all_optional`` are used here)
        """
        self.config = config or CodeGeneratorConfig()

    def generate(self, sample: JsonObject, name: str | None = None) -> IR:
        """
        Build the IR from a single object sample.

        Args:
            sample: The parsed JSON object
            name: Root class name (defaults to JsonDataTransferObject)

        Returns:
            IR with the class tree and its registration order
        """
        ctx = self._new_context(name, multipart=False)
        root = self._build_class(ctx, "", self._root_name(name), sample, depth=0)
        return self._finish(ctx, root)

    def generate_multipart(self, samples: Sequence[JsonObject], name: str | None = None) -> IR:
        """
        Build the IR from several sibling object samples.

        The caller guarantees a non-empty list of objects. Fields missing
        from some samples, or null in any of them, become optional.

        Args:
            samples: The parsed JSON objects
            name: Root class name (defaults to JsonDataTransferObject)

        Returns:
            IR with the class tree and its registration order
        """
        ctx = self._new_context(name, multipart=True)
        root = self._build_merged(ctx, "", self._root_name(name), merge_objects(samples), depth=0)
        return self._finish(ctx, root)

    def _new_context(self, name: str | None, multipart: bool) -> _BuildContext:
        ctx = _BuildContext(multipart=multipart)
        # The root keeps its requested name; nested classes yield on collision
        ctx.class_names.claim(self._root_name(name))
        return ctx

    def _root_name(self, name: str | None) -> str:
        if not name:
            return DEFAULT_ROOT_NAME
        return name.replace(" ", "") or DEFAULT_ROOT_NAME

    def _finish(self, ctx: _BuildContext, root: ClassNode) -> IR:
        return IR(
            root=root,
            classes=tuple(ctx.registry),
            strict_typing=self.config.typed,
            all_optional=self.config.all_optional,
            multipart=ctx.multipart,
        )

    def _build_class(self, ctx: _BuildContext, path: str, name: str, source: JsonObject, depth: int) -> ClassNode:
        """Build a class from one object, fields in source order."""
        scope = _ClassScope(path=path, depth=depth)

        for key, value in source.members.items():
            normalized = normalize_field_name(key)
            if normalized is None:
                logger.debug("Dropping field %s: no usable identifier", value.source_path)
                continue

            is_null = isinstance(value, JsonNull)
            values = [] if is_null else [value]
            field_type = self._resolve_type(ctx, scope, normalized, values, merged=False)
            optional = self.config.all_optional or is_null

            self._add_field(scope, key, normalized, field_type, optional, values)

        return self._register(ctx, scope, name)

    def _build_merged(self, ctx: _BuildContext, path: str, name: str, merged: dict[str, MergeStats], depth: int) -> ClassNode:
        """Build a class from merged statistics, fields in first-seen order."""
        scope = _ClassScope(path=path, depth=depth)

        for key, stats in merged.items():
            normalized = normalize_field_name(key)
            if normalized is None:
                logger.debug("Dropping field %r of %s: no usable identifier", key, name)
                continue

            field_type = self._resolve_type(ctx, scope, normalized, stats.values, merged=True)
            optional = self.config.all_optional or not stats.always_present or stats.nullable_seen

            self._add_field(scope, key, normalized, field_type, optional, stats.values)

        return self._register(ctx, scope, name)

    def _add_field(
        self,
        scope: _ClassScope,
        key: str,
        normalized: str,
        field_type: InferredType,
        optional: bool,
        values: Sequence[JsonValue],
    ) -> None:
        unique = scope.field_names.claim(normalized)
        scope.fields.append(
            FieldDescriptor(
                original_key=key,
                name=unique,
                type=field_type,
                optional=optional,
                needs_mapping=needs_mapping(key, unique),
                format_hint=self._format_hint(field_type, values),
            )
        )

    def _register(self, ctx: _BuildContext, scope: _ClassScope, name: str) -> ClassNode:
        node = ClassNode(
            path=scope.path,
            name=name,
            fields=tuple(scope.fields),
            children=tuple(scope.children),
        )
        ctx.registry.append(node)
        return node

    def _resolve_type(
        self,
        ctx: _BuildContext,
        scope: _ClassScope,
        field_name: str,
        values: Sequence[JsonValue],
        merged: bool,
    ) -> InferredType:
        """
        Resolve the type of a field from its non-null values.

        Args:
            ctx: Build context
            scope: The class owning the field
            field_name: Normalized field name, used for the nested path
            values: Non-null values observed for the field
            merged: Whether the values come from several merged samples

        Returns:
            The inferred type, building nested classes as needed
        """
        tag = unify_many(values)

        if tag is None:
            return InferredType.mixed()

        if tag == JsonType.ARRAY:
            return self._resolve_array(ctx, scope, field_name, values, merged)

        if tag == JsonType.OBJECT:
            if scope.depth >= MAX_NESTING_DEPTH:
                logger.debug("Nesting limit reached at %s, typing as mixed", values[0].source_path)
                return InferredType.mixed()

            objects = [value for value in values if isinstance(value, JsonObject)]
            child = self._build_nested(ctx, scope, field_name, objects, merged)
            return InferredType.class_ref(child)

        return InferredType.scalar_of(tag)

    def _resolve_array(
        self,
        ctx: _BuildContext,
        scope: _ClassScope,
        field_name: str,
        arrays: Sequence[JsonValue],
        merged: bool,
    ) -> InferredType:
        """Resolve an array field: typed if its elements are homogeneous, untyped otherwise."""
        elements = [item for array in arrays if isinstance(array, JsonArray) for item in array.items]
        tag = unify_many(elements)

        if tag is None or tag == JsonType.ARRAY:
            return InferredType.array_of(InferredType.mixed())

        if tag != JsonType.OBJECT:
            return InferredType.array_of(InferredType.scalar_of(tag))

        if scope.depth >= MAX_NESTING_DEPTH:
            logger.debug("Nesting limit reached at %s, typing items as mixed", arrays[0].source_path)
            return InferredType.array_of(InferredType.mixed())

        objects = [item for item in elements if isinstance(item, JsonObject)]

        # Within one sample, differing item shapes are not merged
        if not merged and not has_consistent_structure(objects):
            logger.debug("Items of %s have differing keys, leaving array untyped", arrays[0].source_path)
            return InferredType.array_of(InferredType.mixed())

        # A lone item from one sample keeps single-sample rules
        child = self._build_nested(ctx, scope, field_name, objects, merged=merged or len(objects) > 1)
        return InferredType.array_of(InferredType.class_ref(child))

    def _build_nested(
        self,
        ctx: _BuildContext,
        scope: _ClassScope,
        field_name: str,
        objects: list[JsonObject],
        merged: bool,
    ) -> ClassNode:
        path = join_path(scope.path, field_name)
        name = ctx.class_names.claim(build_class_name(path))

        if merged:
            child = self._build_merged(ctx, path, name, merge_objects(objects), scope.depth + 1)
        else:
            child = self._build_class(ctx, path, name, objects[0], scope.depth + 1)

        scope.children.append(child)
        return child

    def _format_hint(self, field_type: InferredType, values: Sequence[JsonValue]) -> FormatHint | None:
        """Detect a string format from the first non-empty string value."""
        if field_type.scalar != JsonType.STRING:
            return None
        for value in values:
            if isinstance(value, JsonString) and value.value:
                return detect_format(value.value)
        return None
