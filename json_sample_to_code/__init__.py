"""JSON Sample to Code Generator

A Python package for inferring typed classes from sample JSON documents.
Builds a language-neutral class model from one sample or several merged
samples and renders it as Python dataclasses or C# classes.
"""

__version__ = "1.0.1"
__author__ = "François Lagunas"

from .pipeline import (
    IR,
    AtomicWriter,
    ClassNode,
    CodeGeneratorConfig,
    FieldDescriptor,
    GeneratedCodeError,
    OutputConfig,
    OutputMode,
    PipelineGenerator,
    SampleError,
    SchemaBuilder,
    collect_samples,
)

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
    "SampleError",
    "collect_samples",
]
