"""
Pipeline - JSON samples to code generator.

This module provides a multi-phase architecture for generating code
from sample JSON documents:

1. Phase 1 (Collector/Parser): Decode input into a JsonValue tree
2. Phase 2 (Schema Builder): Infer types, merge samples and build the IR
3. Phase 3 (Backend): Render the IR with Jinja2 templates
4. Phase 4 (Writer): Atomically write the generated files
"""

from __future__ import annotations

from .analyzer import IR, ClassNode, FieldDescriptor, SchemaBuilder
from .atomic_writer import AtomicWriter, GeneratedCodeError
from .collector import (
    EmptyMultipartList,
    ExpectedObjectGotOther,
    InvalidNamespace,
    MixedPrimitiveAndObjectList,
    NotParsableInput,
    SampleError,
    Samples,
    collect_samples,
)
from .config import CodeGeneratorConfig, OutputConfig, OutputMode
from .generator import PipelineGenerator

__all__ = [
    "PipelineGenerator",
    "SchemaBuilder",
    "IR",
    "ClassNode",
    "FieldDescriptor",
    "CodeGeneratorConfig",
    "OutputConfig",
    "OutputMode",
    "AtomicWriter",
    "GeneratedCodeError",
    "Samples",
    "collect_samples",
    "SampleError",
    "NotParsableInput",
    "ExpectedObjectGotOther",
    "EmptyMultipartList",
    "MixedPrimitiveAndObjectList",
    "InvalidNamespace",
]
