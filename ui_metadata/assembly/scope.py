"""Per-request collaborators shared by the assemblers of one request."""

from dataclasses import dataclass, field

from ui_metadata.config import AssemblyOptions, MetadataContext
from ui_metadata.dictionary.legacy_registry import LegacyProcessRegistry, StaticLegacyProcessRegistry
from ui_metadata.dictionary.repository import DictionaryRepository
from ui_metadata.domain.enums import EntityKind
from ui_metadata.domain.models import WindowAccess
from ui_metadata.resolution.expression_translator import ExpressionTranslator, LogicExpressionTranslator


@dataclass
class AssemblyScope:
    """Everything an assembler reads, threaded explicitly instead of looked up globally.

    A scope lives for exactly one request. ``windows_in_progress`` is the
    stack of windows currently being assembled, used to stop window-reference
    recursion from looping.

    Args:
        repository: Dictionary read view.
        context: Caller role, language, and user.
        options: Output options.
        translator: Legacy logic expression translator.
        legacy_registry: Button fields served by the legacy process engine.
    """

    repository: DictionaryRepository
    context: MetadataContext
    options: AssemblyOptions = field(default_factory=AssemblyOptions)
    translator: ExpressionTranslator = field(default_factory=LogicExpressionTranslator)
    legacy_registry: LegacyProcessRegistry = field(default_factory=StaticLegacyProcessRegistry)
    windows_in_progress: list[str] = field(default_factory=list)

    @property
    def language(self) -> str:
        return self.context.language

    def window_access(self, window_id: str | None) -> WindowAccess | None:
        """Active window grant of the current role, if any."""
        if window_id is None:
            return None
        role_id = self.context.role_id
        return self.repository.first(
            EntityKind.WINDOW_ACCESS,
            lambda a: a.role_id == role_id and a.window_id == window_id and a.active,
        )

    def has_process_access(self, process_definition_id: str | None) -> bool:
        """Whether the current role may launch a process definition; no process means yes."""
        if process_definition_id is None:
            return True
        role_id = self.context.role_id
        return self.repository.first(
            EntityKind.PROCESS_ACCESS,
            lambda a: a.role_id == role_id and a.process_definition_id == process_definition_id and a.active,
        ) is not None
