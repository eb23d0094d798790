"""
C# code generation backend.

Generates one C# class file per IR class.
"""

from __future__ import annotations

import json
from typing import Any

from ...utils import snake_to_pascal_case
from ..analyzer.ir_nodes import IR, ClassNode, FieldDescriptor, FormatHint, InferredType, JsonType, TypeKind
from ..analyzer.name_normalizer import NameRegistry
from ..config import CodeGeneratorConfig
from .base import CodeBackend

# Format hints with a matching System.ComponentModel.DataAnnotations attribute
FORMAT_ATTRIBUTES = {
    FormatHint.EMAIL: "EmailAddress",
    FormatHint.URL: "Url",
}


class CSharpBackend(CodeBackend):
    """C# code generation backend."""

    TEMPLATE_LANG = "cs"
    FILE_EXTENSION = "cs"

    TYPE_MAP = {
        JsonType.BOOL: "bool",
        JsonType.INT: "int",
        JsonType.FLOAT: "double",
        JsonType.STRING: "string",
    }

    MIXED_TYPE = "object"

    def __init__(self, config: CodeGeneratorConfig):
        super().__init__(config)
        self.required_imports: set[str] = set()

    def generate(self, ir: IR, namespace: str, generation_comment: str = "") -> dict[str, str]:
        """Generate one C# file per class from IR."""
        files = {}
        for class_node in ir.classes:
            # Reset import tracking
            self.required_imports = {"System", "Newtonsoft.Json"}
            self.required_imports.update(self.config.csharp_usings)

            class_ctx = self._prepare_class_context(ir, class_node)
            class_ctx["NAMESPACE"] = namespace
            rendered = self.class_template.render(class_ctx)

            prefix = self.prefix_template.render(
                generation_comment=generation_comment,
                required_imports=sorted(self.required_imports),
            )
            files[self.output_path(namespace, class_node.name)] = prefix.rstrip("\n") + "\n\n" + rendered.rstrip("\n") + "\n"

        return files

    def translate_type(self, field_type: InferredType) -> str:
        """Translate an inferred type to a C# type string."""
        if field_type.kind == TypeKind.ARRAY:
            self.required_imports.add("System.Collections.Generic")
            return f"List<{self.translate_type(field_type.item)}>"

        return self._translate_common(field_type)

    def _prepare_class_context(self, ir: IR, class_node: ClassNode) -> dict[str, Any]:
        # Member names cannot repeat or match the enclosing type
        member_names = NameRegistry("property name")
        member_names.claim(class_node.name)

        properties = []
        for field in class_node.fields:
            name = member_names.claim(self._property_name(field))
            properties.append(self._prepare_property_context(ir, field, name))

        return {
            "CLASS_NAME": class_node.name,
            "properties": properties,
        }

    def _property_name(self, field: FieldDescriptor) -> str:
        """Get the property name (PascalCase)."""
        return snake_to_pascal_case(field.name) or field.name

    def _prepare_property_context(self, ir: IR, field: FieldDescriptor, name: str) -> dict[str, Any]:
        type_str = self.field_type(ir, field)

        # JsonProperty always carries the wire name, so properties can be PascalCase
        attributes = [f"JsonProperty({json.dumps(field.original_key)})"]

        attribute = FORMAT_ATTRIBUTES.get(field.format_hint)
        if attribute:
            self.required_imports.add("System.ComponentModel.DataAnnotations")
            attributes.append(attribute)

        if field.optional:
            declaration = f"public {type_str}? {name} {{ get; set; }}"
        else:
            declaration = f"public required {type_str} {name} {{ get; set; }}"

        if field.format_hint is not None and attribute is None:
            declaration += f" // format: {field.format_hint.value}"

        return {
            "attributes": attributes,
            "declaration": declaration,
        }
