"""Request context and assembly options."""

import logging
import os
from dataclasses import dataclass

DEFAULT_LANGUAGE = 'en_US'

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


@dataclass(frozen=True)
class MetadataContext:
    """Caller identity threaded through every assembler.

    Args:
        role_id: Role whose access grants filter the output.
        role_name: Role display name, used in authorization errors.
        language: Language code used for translations (e.g. ``es_ES``).
        user_id: Calling user, needed only for session summaries.
    """

    role_id: str
    role_name: str | None = None
    language: str = DEFAULT_LANGUAGE
    user_id: str | None = None


@dataclass
class AssemblyOptions:
    """Options controlling the produced documents."""

    language: str = DEFAULT_LANGUAGE
    include_audit_fields: bool = True
    pretty: bool = True

    @classmethod
    def from_env(cls) -> 'AssemblyOptions':
        """Build options from ``UI_METADATA_*`` environment variables."""
        audit = os.getenv('UI_METADATA_AUDIT_FIELDS', 'true').lower()
        return cls(
            language=os.getenv('UI_METADATA_LANGUAGE', DEFAULT_LANGUAGE),
            include_audit_fields=audit not in ('0', 'false', 'no'),
        )


def configure_logging() -> None:
    """Configure root logging from the ``LOG_LEVEL`` environment variable."""
    level = getattr(logging, os.getenv('LOG_LEVEL', 'INFO').upper(), logging.INFO)
    logging.basicConfig(level=level, format=LOG_FORMAT)
