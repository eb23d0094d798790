"""
Pipeline generator.

Ties the phases together:

1. Phase 1 (Parser): decoded JSON -> JsonValue tree
2. Phase 2 (Schema Builder): JsonValue tree(s) -> IR
3. Phase 3 (Backend): IR -> mapping of output path to source text
4. Phase 4 (Writer): optional atomic write to disk
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

from .analyzer.ir_nodes import IR
from .analyzer.schema_builder import SchemaBuilder
from .atomic_writer import AtomicWriter
from .backends import CodeBackend, CSharpBackend, PythonBackend
from .collector import check_samples, validate_namespace
from .config import CodeGeneratorConfig, OutputMode
from .json_ast.parser import JsonParser

logger = logging.getLogger(__name__)

BACKENDS: dict[str, type[CodeBackend]] = {
    "python": PythonBackend,
    "cs": CSharpBackend,
}

COMMENT_PREFIXES = {
    "python": "#",
    "cs": "//",
}


class PipelineGenerator:
    """Generates source files from JSON samples."""

    def __init__(
        self,
        name: str | None,
        samples: Any,
        namespace: str,
        config: CodeGeneratorConfig | None = None,
        language: str = "python",
        multipart: bool = False,
        command_line: str = "",
    ):
        """
        Initialize the generator.

        Args:
            name: Root class name (None for the default name)
            samples: A decoded JSON object, or a list of them in multipart mode
            namespace: Dotted namespace or module path of the output
            config: Code generation configuration
            language: Target language ("python" or "cs")
            multipart: Whether ``samples`` is a list of objects to merge
            command_line: Command line to record in the generation comment

        Raises:
            ValueError: If the language is not supported
            SampleError: If the samples or the namespace are invalid
        """
        if language not in BACKENDS:
            raise ValueError(f"Language '{language}' is not supported")

        self.name = name
        self.samples = check_samples(samples, multipart)
        self.namespace = validate_namespace(namespace, language)
        self.config = config or CodeGeneratorConfig()
        self.language = language
        self.command_line = command_line
        self.backend = BACKENDS[language](self.config)
        self._ir: IR | None = None

    def build(self) -> IR:
        """Build (once) and return the IR."""
        if self._ir is None:
            parser = JsonParser()
            builder = SchemaBuilder(self.config)
            if self.samples.multipart:
                objects = [parser.parse(sample, f"$[{i}]") for i, sample in enumerate(self.samples.values)]
                self._ir = builder.generate_multipart(objects, self.name)
            else:
                self._ir = builder.generate(parser.parse(self.samples.values), self.name)
            logger.debug("Built %d classes for %s", len(self._ir.classes), self._ir.root_name)
        return self._ir

    def generate(self) -> dict[str, str]:
        """Generate source text, keyed by path relative to the output directory."""
        return self.backend.generate(self.build(), self.namespace, self.generation_comment())

    def generation_comment(self) -> str:
        if not self.config.add_generation_comment:
            return ""
        prefix = COMMENT_PREFIXES[self.language]
        lines = [f"{prefix} Generated by json_sample_to_code from sample JSON, do not edit by hand."]
        if self.command_line:
            lines.append(f"{prefix} Command: {self.command_line}")
        return "\n".join(lines)

    def write(self, output_dir: Path | str = ".") -> list[Path]:
        """
        Generate and write all files below ``output_dir``.

        Returns:
            The written paths

        Raises:
            FileExistsError: If a file exists and the output mode forbids overwriting
            GeneratedCodeError: If generated code fails validation
        """
        output = self.config.output
        writer = AtomicWriter(atomic=output.atomic_write)
        files = self.generate()
        written = []

        # Refuse before touching anything, so a run never leaves partial output
        if output.mode == OutputMode.ERROR_IF_EXISTS:
            for relative_path in files:
                if (Path(output_dir) / relative_path).exists():
                    raise FileExistsError(f"Output file already exists: {Path(output_dir) / relative_path}. Use --force to overwrite.")

        for relative_path, content in files.items():
            path = Path(output_dir) / relative_path
            if output.mode == OutputMode.FORCE:
                writer.write(path, content, self.language, output.validate_before_write)
            else:
                writer.write_if_not_exists(path, content, self.language, output.validate_before_write)
            written.append(path)

        return written
