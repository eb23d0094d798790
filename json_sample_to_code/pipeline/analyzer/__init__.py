"""
Analyzer module.

Contains type unification, name normalization, multipart field merging
and the schema builder that produces the IR.
"""

from __future__ import annotations

from .field_merger import has_consistent_structure, merge_objects
from .format_hints import FORMAT_PROBES, detect_format
from .ir_nodes import (
    IR,
    ClassNode,
    FieldDescriptor,
    FormatHint,
    InferredType,
    JsonType,
    MergeStats,
    TypeKind,
)
from .name_normalizer import (
    DEFAULT_ROOT_NAME,
    NameRegistry,
    build_class_name,
    needs_mapping,
    normalize_field_name,
)
from .schema_builder import MAX_NESTING_DEPTH, SchemaBuilder
from .type_unifier import classify, unify_many

__all__ = [
    "IR",
    "ClassNode",
    "FieldDescriptor",
    "FormatHint",
    "InferredType",
    "JsonType",
    "MergeStats",
    "TypeKind",
    "classify",
    "unify_many",
    "normalize_field_name",
    "needs_mapping",
    "build_class_name",
    "NameRegistry",
    "DEFAULT_ROOT_NAME",
    "merge_objects",
    "has_consistent_structure",
    "detect_format",
    "FORMAT_PROBES",
    "SchemaBuilder",
    "MAX_NESTING_DEPTH",
]
