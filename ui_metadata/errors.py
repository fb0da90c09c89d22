"""Error taxonomy for metadata assembly.

Every error carries a human-readable ``message`` and the HTTP status the
transport layers (Flask app, MCP server) map it to.
"""


class MetadataError(Exception):
    """Base class for all assembly failures."""

    http_status = 500

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(self.message)


class NotFoundError(MetadataError):
    """A referenced dictionary entity does not exist."""

    http_status = 404

    def __init__(self, kind: str, entity_id: str | None) -> None:
        self.kind = kind
        self.entity_id = entity_id
        super().__init__(f"{kind} not found: {entity_id}")


class UnauthorizedError(MetadataError):
    """The current role holds no access grant for the requested resource."""

    http_status = 403

    def __init__(self, role_name: str | None, resource_id: str) -> None:
        self.role_name = role_name
        self.resource_id = resource_id
        super().__init__(f"Role '{role_name}' has no access to {resource_id}")


class ConfigurationError(MetadataError):
    """A reference or selector field has no resolvable display or value field."""


class TranslationError(MetadataError):
    """A legacy logic expression could not be translated."""

    def __init__(self, message: str, expression: str | None = None) -> None:
        self.expression = expression
        super().__init__(message)


class AssemblyError(MetadataError):
    """The dictionary is inconsistent in a way that prevents building a document."""


class InvalidRequestError(MetadataError):
    """A request is missing context needed to assemble anything."""

    http_status = 400
