"""
Base class for code generation backends.

Defines the interface that all language-specific backends must implement.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path, PurePosixPath
from typing import Any

import jinja2

from ..analyzer.ir_nodes import IR, ClassNode, FieldDescriptor, InferredType, JsonType, TypeKind
from ..config import CodeGeneratorConfig


class CodeBackend(ABC):
    """Abstract base class for code generation backends."""

    # Type mapping from scalar tags to language types
    TYPE_MAP: dict[JsonType, str] = {}

    # Fallback type for Mixed
    MIXED_TYPE: str = ""

    # Template directory name
    TEMPLATE_LANG: str = ""

    # File extension
    FILE_EXTENSION: str = ""

    def __init__(self, config: CodeGeneratorConfig):
        """
        Initialize the backend.

        Args:
            config: Code generation configuration
        """
        self.config = config
        self._setup_templates()

    def _setup_templates(self) -> None:
        """Set up Jinja2 templates."""
        template_dir = Path(__file__).parent.parent.parent / "templates" / self.TEMPLATE_LANG
        self.jinja_env = jinja2.Environment(
            loader=jinja2.FileSystemLoader(str(template_dir)),
            lstrip_blocks=True,
            trim_blocks=True,
        )

        self.prefix_template = self.jinja_env.get_template(f"prefix.{self.FILE_EXTENSION}.jinja2")
        self.class_template = self.jinja_env.get_template(f"class.{self.FILE_EXTENSION}.jinja2")

    @abstractmethod
    def generate(self, ir: IR, namespace: str, generation_comment: str = "") -> dict[str, str]:
        """
        Generate code from IR.

        Args:
            ir: The intermediate representation
            namespace: Dotted namespace (or module path) of the generated code
            generation_comment: Header comment, already prefixed for the language

        Returns:
            Mapping from relative output path to source text
        """

    @abstractmethod
    def translate_type(self, field_type: InferredType) -> str:
        """
        Translate an inferred type to a language-specific type string.

        Args:
            field_type: The inferred type

        Returns:
            Language-specific type string
        """

    def field_type(self, ir: IR, field: FieldDescriptor) -> str:
        """Type of a field, honoring the strict typing flag."""
        if not ir.strict_typing:
            return self.MIXED_TYPE
        return self.translate_type(field.type)

    def namespace_dir(self, namespace: str) -> PurePosixPath:
        """Map a dotted namespace to a relative directory."""
        parts = [part for part in namespace.split(".") if part]
        return PurePosixPath(*parts) if parts else PurePosixPath(".")

    def output_path(self, namespace: str, name: str) -> str:
        return str(self.namespace_dir(namespace) / f"{name}.{self.FILE_EXTENSION}")

    def _translate_common(self, field_type: InferredType) -> str | None:
        """Translate the kinds that map the same way in every language."""
        if field_type.kind == TypeKind.SCALAR:
            return self.TYPE_MAP[field_type.scalar]

        if field_type.kind == TypeKind.CLASS:
            return field_type.class_name

        if field_type.kind == TypeKind.MIXED:
            return self.MIXED_TYPE

        return None

    @abstractmethod
    def _prepare_class_context(self, ir: IR, class_node: ClassNode) -> dict[str, Any]:
        """
        Prepare the template context for a class.

        Args:
            ir: The IR being rendered
            class_node: The class to render

        Returns:
            Dictionary of template variables
        """
