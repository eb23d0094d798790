"""
Python code generation backend.

Generates one module of ``dataclasses_json`` dataclasses from IR.
"""

from __future__ import annotations

import collections
import json
import keyword
from typing import Any

from ...utils import to_snake_case
from ..analyzer.ir_nodes import IR, ClassNode, FieldDescriptor, InferredType, JsonType, TypeKind
from ..analyzer.name_normalizer import NameRegistry
from ..config import CodeGeneratorConfig
from .base import CodeBackend

# Names the generated module binds at class or module level
RESERVED_NAMES = frozenset({"Any", "bool", "config", "dataclass", "dataclass_json", "field", "float", "int", "list", "str"})


class PythonBackend(CodeBackend):
    """Python code generation backend."""

    TEMPLATE_LANG = "python"
    FILE_EXTENSION = "py"

    TYPE_MAP = {
        JsonType.BOOL: "bool",
        JsonType.INT: "int",
        JsonType.FLOAT: "float",
        JsonType.STRING: "str",
    }

    MIXED_TYPE = "Any"

    def __init__(self, config: CodeGeneratorConfig):
        super().__init__(config)
        self.python_imports: set[tuple[str, str]] = set()
        self.class_names: dict[str, str] = {}

    def generate(self, ir: IR, namespace: str, generation_comment: str = "") -> dict[str, str]:
        """Generate a Python module from IR."""
        # Reset import tracking
        self.python_imports = set()
        self.class_names = self._rename_classes(ir)

        # Always include base imports
        self.python_imports.add(("dataclasses", "dataclass"))
        self.python_imports.add(("dataclasses_json", "dataclass_json"))

        # Add future annotations if configured
        if self.config.use_future_annotations:
            self.python_imports.add(("__future__", "annotations"))

        # Classes are registered nested-first, so no forward references are needed
        rendered_classes = []
        for class_node in ir.classes:
            class_ctx = self._prepare_class_context(ir, class_node)
            rendered_classes.append(self.class_template.render(class_ctx).rstrip("\n") + "\n")

        prefix = self.prefix_template.render(
            generation_comment=generation_comment,
            required_imports=self._assemble_imports(),
        )

        code = prefix.rstrip("\n") + "\n\n\n" + "\n\n".join(rendered_classes)
        return {self.output_path(namespace, to_snake_case(ir.root_name)): code}

    def translate_type(self, field_type: InferredType) -> str:
        """Translate an inferred type to a Python type string."""
        if field_type.kind == TypeKind.ARRAY:
            return f"list[{self.translate_type(field_type.item)}]"

        if field_type.kind == TypeKind.CLASS:
            return self.class_names.get(field_type.class_name, field_type.class_name)

        result = self._translate_common(field_type)
        if result == self.MIXED_TYPE:
            self.python_imports.add(("typing", "Any"))
        return result

    def field_type(self, ir: IR, field: FieldDescriptor) -> str:
        result = super().field_type(ir, field)
        if result == self.MIXED_TYPE:
            self.python_imports.add(("typing", "Any"))
        return result

    def attribute_name(self, field: FieldDescriptor) -> str:
        """Python attribute name; keywords and reserved names get a trailing underscore."""
        if keyword.iskeyword(field.name) or field.name in RESERVED_NAMES:
            return f"{field.name}_"
        return field.name

    def _rename_classes(self, ir: IR) -> dict[str, str]:
        """Map class names that are keywords or names bound by the module to free names."""
        taken = NameRegistry("class name")
        for class_node in ir.classes:
            taken.claim(class_node.name)

        renamed = {}
        for class_node in ir.classes:
            name = class_node.name
            if not keyword.iskeyword(name) and name not in RESERVED_NAMES:
                continue
            unique = f"{name}_"
            while unique in taken:
                unique += "_"
            renamed[name] = taken.claim(unique)
        return renamed

    def _prepare_class_context(self, ir: IR, class_node: ClassNode) -> dict[str, Any]:
        properties = [self._format_field(ir, field) for field in self._order_fields(class_node.fields)]
        return {
            "CLASS_NAME": self.class_names.get(class_node.name, class_node.name),
            "properties": properties,
        }

    def _order_fields(self, fields: tuple[FieldDescriptor, ...]) -> list[FieldDescriptor]:
        """
        Order fields for dataclass compatibility.

        Required fields (without defaults) must come before optional fields
        (with defaults); relative order is otherwise preserved.
        """
        required_fields = [field for field in fields if not field.optional]
        optional_fields = [field for field in fields if field.optional]
        return required_fields + optional_fields

    def _format_field(self, ir: IR, field: FieldDescriptor) -> str:
        """Format one dataclass field line."""
        name = self.attribute_name(field)
        type_str = self.field_type(ir, field)

        if field.optional and type_str != self.MIXED_TYPE:
            type_str = f"{type_str} | None"

        init = self._format_init(field, mapped=field.needs_mapping or name != field.original_key)

        line = f"{name}: {type_str}"
        if init:
            line += f" = {init}"
        if field.format_hint is not None:
            line += f"  # format: {field.format_hint.value}"
        return line

    def _format_init(self, field: FieldDescriptor, mapped: bool) -> str:
        """Format the default value, with the wire name mapping when required."""
        if not mapped:
            return "None" if field.optional else ""

        self.python_imports.add(("dataclasses", "field"))
        self.python_imports.add(("dataclasses_json", "config"))
        metadata = f"metadata=config(field_name={json.dumps(field.original_key)})"
        if field.optional:
            return f"field(default=None, {metadata})"
        return f"field({metadata})"

    def _assemble_imports(self) -> list[str]:
        """Assemble Python import statements."""
        # Group imports by module
        import_groups: dict[str, set[str]] = collections.defaultdict(set)
        for module, name in self.python_imports:
            import_groups[module].add(name)

        # Define standard library modules
        STDLIB_MODULES = {"dataclasses", "typing"}

        # Separate stdlib and third-party
        stdlib_groups = {m: import_groups[m] for m in import_groups if m in STDLIB_MODULES}
        third_party_groups = {m: import_groups[m] for m in import_groups if m not in STDLIB_MODULES and m != "__future__"}

        assembled = []

        # __future__ imports first
        if "__future__" in import_groups:
            names = sorted(import_groups["__future__"])
            assembled.append(f"from __future__ import {', '.join(names)}")
            if stdlib_groups or third_party_groups:
                assembled.append("")

        # Standard library
        for module in sorted(stdlib_groups.keys()):
            names = sorted(stdlib_groups[module])
            assembled.append(f"from {module} import {', '.join(names)}")

        if stdlib_groups and third_party_groups:
            assembled.append("")

        # Third party
        for module in sorted(third_party_groups.keys()):
            names = sorted(third_party_groups[module])
            assembled.append(f"from {module} import {', '.join(names)}")

        return assembled
