"""
Exception hierarchy for schema normalization and code generation.

All generation failures derive from GeneratorError so callers can abort an
export with a single except clause.
"""

from typing import Optional, Sequence


class GeneratorError(Exception):
    """Base exception for code generation errors."""

    pass


class NotFoundError(GeneratorError):
    """A page, project, component or version does not exist."""

    def __init__(self, entity: str, identifier: str):
        self.entity = entity
        self.identifier = identifier
        super().__init__(f"{entity.capitalize()} not found: {identifier}")


class SchemaError(GeneratorError):
    """A component field schema is malformed."""

    def __init__(self, message: str, path: Optional[Sequence[str]] = None):
        self.path = tuple(path or ())
        self.reason = message
        if self.path:
            message = f"{'.'.join(self.path)}: {message}"
        super().__init__(message)


class ValidationError(GeneratorError):
    """Caller supplied export parameters are invalid."""

    pass
