"""
Atomic file writer for safe code generation.

Ensures that file writes are atomic to prevent data corruption
from interrupted operations.
"""

from __future__ import annotations

import ast
import logging
import re
import tempfile
from collections.abc import Callable
from pathlib import Path

logger = logging.getLogger(__name__)

_CS_STRING_LITERAL = re.compile(r'"(?:\\.|[^"\\])*"')


class GeneratedCodeError(Exception):
    """Raised when generated code fails validation before being written."""


class AtomicWriter:
    """Handles atomic file writes with validation.

    Uses a two-phase commit approach:
    1. Write to a temporary file in the same directory
    2. Validate the content
    3. Atomically replace the target file

    This ensures that an interrupted write operation never leaves
    the target file in an incomplete state.
    """

    def __init__(
        self,
        validate_python: Callable[[str], None] | None = None,
        validate_csharp: Callable[[str], None] | None = None,
        atomic: bool = True,
    ):
        """Initialize the atomic writer.

        Args:
            validate_python: Optional validation function for Python code
            validate_csharp: Optional validation function for C# code
            atomic: Whether to go through a temporary file
        """
        self._validate_python = validate_python or self._default_validate_python
        self._validate_csharp = validate_csharp or self._default_validate_csharp
        self._atomic = atomic

    def write(
        self,
        path: Path,
        content: str,
        language: str,
        validate: bool = True,
    ) -> None:
        """Write content to file atomically.

        Args:
            path: Target file path
            content: Content to write
            language: Language for validation ("python" or "cs")
            validate: Whether to validate before finalizing

        Raises:
            GeneratedCodeError: If validation fails
            OSError: If file operations fail
        """
        if validate:
            self._validate_content(content, language)

        # Ensure parent directory exists
        path.parent.mkdir(parents=True, exist_ok=True)

        if not self._atomic:
            path.write_text(content, encoding="utf-8")
            logger.debug("Wrote %s", path)
            return

        # Same directory ensures atomic rename on the same filesystem
        temp_fd, temp_path_str = tempfile.mkstemp(
            dir=path.parent,
            prefix=f".{path.name}.",
            suffix=".tmp",
            text=True,
        )

        temp_path = Path(temp_path_str)

        try:
            with open(temp_fd, "w", encoding="utf-8") as f:
                f.write(content)

            # On POSIX systems, rename() is atomic if source and dest are on same filesystem
            temp_path.replace(path)
        except Exception:
            if temp_path.exists():
                temp_path.unlink()
            raise

        logger.debug("Wrote %s", path)

    def write_if_not_exists(
        self,
        path: Path,
        content: str,
        language: str,
        validate: bool = True,
    ) -> None:
        """Write content only if the file doesn't exist.

        Raises:
            FileExistsError: If the file already exists
            GeneratedCodeError: If validation fails
        """
        if path.exists():
            raise FileExistsError(f"Output file already exists: {path}. Use --force to overwrite.")

        self.write(path, content, language, validate)

    def _validate_content(self, content: str, language: str) -> None:
        if language == "python":
            self._validate_python(content)
        elif language == "cs":
            self._validate_csharp(content)

    def _default_validate_python(self, content: str) -> None:
        try:
            ast.parse(content)
        except SyntaxError as e:
            raise GeneratedCodeError(f"Generated Python code is not valid: {e}") from e

    def _default_validate_csharp(self, content: str) -> None:
        # Basic structural checks (no full parsing)
        if "namespace " not in content:
            raise GeneratedCodeError("Generated C# code is missing namespace declaration")

        if "class " not in content:
            raise GeneratedCodeError("Generated C# code has no type definitions")

        # Braces inside string literals (wire names) do not count
        code = _CS_STRING_LITERAL.sub('""', content)
        open_braces = code.count("{")
        close_braces = code.count("}")
        if open_braces != close_braces:
            raise GeneratedCodeError(f"Generated C# code has unbalanced braces: {open_braces} open, {close_braces} close")
