"""
Base generator interface for code generation targets.

Defines the contract a language generator implements and the
error-handling wrapper that turns a run into a GenerationResult.
"""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Dict, List, Optional

from ...logging_config import get_logger
from .config import GeneratorConfig, load_config
from .schema import SchemaDocument, SchemaError
from .templates import TemplateEngine, TemplateError, create_template_engine

logger = get_logger(__name__)


class GeneratorError(Exception):
    """Base exception for code generation errors."""

    pass


class CodeGenerator(ABC):
    """Abstract base class for code generators."""

    def __init__(self, config: Optional[GeneratorConfig] = None):
        """Initialize generator with optional configuration."""
        self.config = config or load_config()
        self.warnings: List[str] = []
        # Name the root document was declared as by the last generate() call
        self.root_type: Optional[str] = None
        self._template_engine = None
        self._setup_templates()

    def _setup_templates(self):
        """Setup template engine for this generator."""
        self._template_engine = create_template_engine(self.get_template_directory())

    @property
    @abstractmethod
    def language_name(self) -> str:
        """Return the name of the target language."""
        pass

    @property
    @abstractmethod
    def file_extension(self) -> str:
        """Return the file extension for generated files."""
        pass

    def get_template_directory(self) -> Optional[Path]:
        """
        Return the directory containing templates for this generator.

        Return None to use in-memory templates only.
        """
        return None

    @property
    def template_engine(self) -> TemplateEngine:
        """Get the template engine for this generator."""
        if self._template_engine is None:
            self._setup_templates()
        return self._template_engine

    @abstractmethod
    def generate(self, document: SchemaDocument) -> str:
        """
        Generate code for a document and every schema it references.

        Args:
            document: Root schema document

        Returns:
            Generated code as a string

        Raises:
            SchemaError: On the first resolution failure
        """
        pass

    def type_name(self, document: SchemaDocument) -> str:
        """Name of the type generated for ``document``."""
        return document.title or self.config.root_name

    def format_code(self, code: str) -> str:
        """
        Apply formatting to generated code.

        Strips trailing whitespace and collapses runs of blank lines.
        """
        lines = code.split("\n")
        formatted_lines = []
        blank_count = 0

        for line in lines:
            stripped = line.rstrip()
            if not stripped:
                blank_count += 1
                if blank_count <= 1:
                    formatted_lines.append("")
            else:
                blank_count = 0
                formatted_lines.append(stripped)

        code = "\n".join(formatted_lines).strip("\n") + "\n"
        if self.config.line_ending != "\n":
            code = code.replace("\n", self.config.line_ending)
        return code

    def render_template(self, template_name: str, context: Dict[str, Any]) -> str:
        """Render a template with context."""
        return self.template_engine.render_template(template_name, context)

    def template_exists(self, template_name: str) -> bool:
        """Check if a template exists."""
        return self.template_engine.template_exists(template_name)


class GenerationResult:
    """Container for generation results and metadata."""

    def __init__(
        self,
        code: str,
        warnings: Optional[List[str]] = None,
        metadata: Optional[Dict[str, Any]] = None,
    ):
        """
        Initialize generation result.

        Args:
            code: Generated code
            warnings: Any warnings from generation
            metadata: Additional metadata about generation
        """
        self.code = code
        self.warnings = warnings or []
        self.metadata = metadata or {}
        self.success = True
        self.error_message: Optional[str] = None
        self.exception: Optional[Exception] = None

    @classmethod
    def error(
        cls, message: str, exception: Optional[Exception] = None
    ) -> "GenerationResult":
        """Create a failed generation result."""
        result = cls(code="")
        result.success = False
        result.error_message = message
        result.exception = exception
        return result


def generate_code(
    generator: CodeGenerator, document: SchemaDocument
) -> GenerationResult:
    """
    Generate code using the specified generator with error handling.

    The first error aborts the run; no partial code is returned.

    Args:
        generator: Code generator instance
        document: Root schema document

    Returns:
        GenerationResult with code, warnings, and metadata
    """
    try:
        code = generator.generate(document)
        formatted_code = generator.format_code(code)
    except (SchemaError, TemplateError, GeneratorError) as e:
        logger.error(f"Code generation failed: {e}")
        return GenerationResult.error(f"Code generation failed: {e}", exception=e)

    metadata = {
        "language": generator.language_name,
        "file_extension": generator.file_extension,
        "root_type": generator.root_type or generator.type_name(document),
        "type_count": len(getattr(generator, "generated_types", ())),
        "source": document.source,
    }

    return GenerationResult(formatted_code, list(generator.warnings), metadata)
