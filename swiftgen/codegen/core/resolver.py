"""
Reference resolution for ``$ref`` tokens.

Local references (``#/definitions/<name>``) are looked up in the enclosing
document; anything else is treated as the location of another schema
document, read from disk or fetched over HTTP.
"""

from pathlib import Path
from typing import Optional, Sequence, Tuple, Union
from urllib.parse import urljoin

from ...logging_config import get_logger
from ...utils import SourceLoadError, is_url, load_bytes_from_file, load_bytes_from_url
from .schema import (
    SchemaDocument,
    SchemaError,
    SchemaProperty,
    decode_schema,
    validate_loaded_schema,
)

logger = get_logger(__name__)

DEFINITIONS_PREFIX = "#/definitions/"


class ResolutionError(SchemaError):
    """Base exception for reference resolution errors."""

    def __init__(self, message: str, ref: Optional[str] = None):
        self.ref = ref
        super().__init__(message)


class UnresolvedReferenceError(ResolutionError):
    """Raised when a local reference names a missing definition."""

    pass


class ReferenceLoadError(ResolutionError):
    """Raised when an external reference location cannot be read."""

    pass


class CyclicReferenceError(ResolutionError):
    """Raised when references form a cycle."""

    def __init__(self, chain: Sequence[str]):
        chain = tuple(chain)
        self.chain = chain
        super().__init__(
            f"cyclic $ref: {' -> '.join(chain)}", ref=chain[-1] if chain else None
        )


def is_local_reference(token: str) -> bool:
    return token.startswith("#")


def split_reference(token: str) -> Tuple[str, str]:
    """Split ``location#fragment`` into its two parts."""
    location, _, fragment = token.partition("#")
    return location, f"#{fragment}" if fragment else ""


class ReferenceResolver:
    """Resolves property references to concrete schema documents.

    Resolution is not memoized: every call looks the reference up again,
    re-reading external documents.
    """

    def __init__(self, timeout: int = 30):
        self.timeout = timeout

    def resolve(
        self,
        ref: Union[str, SchemaProperty],
        enclosing: SchemaDocument,
    ) -> SchemaDocument:
        """
        Resolve a reference token against its enclosing document.

        Args:
            ref: ``$ref`` token or the property carrying it
            enclosing: Document that declares the property

        Returns:
            The referenced SchemaDocument

        Raises:
            UnresolvedReferenceError: Local definition not found
            ReferenceLoadError: External location unreadable
            DecodeError: External document is not a valid schema
            InvalidSchemaError: External document has untyped properties
        """
        token = ref.ref if isinstance(ref, SchemaProperty) else ref
        if not token:
            raise UnresolvedReferenceError("empty $ref", ref=token)

        if is_local_reference(token):
            return self.resolve_local(token, enclosing)
        return self.resolve_external(token, enclosing)

    def resolve_local(self, token: str, enclosing: SchemaDocument) -> SchemaDocument:
        """Look up ``#/definitions/<name>`` in the enclosing document chain."""
        if not token.startswith(DEFINITIONS_PREFIX):
            raise UnresolvedReferenceError(
                f"unsupported local $ref: {token}", ref=token
            )

        name = token[len(DEFINITIONS_PREFIX) :]
        document: Optional[SchemaDocument] = enclosing
        while document is not None:
            if name in document.definitions:
                logger.debug(f"Resolved {token} locally")
                return document.definitions[name]
            document = document.parent

        logger.error(f"Unable to find definition for $ref: {token}")
        raise UnresolvedReferenceError(
            f"unable to find definition for $ref: {token}", ref=token
        )

    def resolve_external(
        self, token: str, enclosing: SchemaDocument
    ) -> SchemaDocument:
        """Load the document at the token's location."""
        location, fragment = split_reference(token)
        target = self.locate(location, enclosing)

        logger.info(f"Loading referenced schema {target}")
        try:
            if is_url(target):
                source, data = load_bytes_from_url(target, self.timeout)
            else:
                source, data = load_bytes_from_file(target)
        except (SourceLoadError, OSError) as e:
            raise ReferenceLoadError(
                f"unable to load $ref {token}: {e}", ref=token
            ) from e

        document = validate_loaded_schema(decode_schema(data, source=source))

        if fragment:
            return self.resolve_local(fragment, document)
        return document

    def locate(self, location: str, enclosing: SchemaDocument) -> str:
        """Turn a reference location into an absolute path or URL.

        Relative locations are taken relative to the enclosing document's
        source, a file path or URL, when there is one.
        """
        if is_url(location):
            return location

        source = enclosing.root.source
        path = Path(location)
        if not path.is_absolute() and source:
            if is_url(source):
                return urljoin(source, location)
            path = Path(source).parent / path
        return str(path.resolve())


def node_key(document: SchemaDocument) -> str:
    """Canonical identity of a document: resolved source plus JSON pointer.

    Documents decoded from the same location compare equal under this key
    even when they are separate objects, which is what cycle detection needs
    since external references are reloaded on every resolution.
    """
    source = document.root.source
    if source and not is_url(source):
        source = str(Path(source).resolve())
    elif not source:
        source = f"<{document.root.title or 'schema'}>"
    return f"{source}{document.pointer}"
