"""Per-language text lookup for translatable entity properties."""

from typing import Any


def translate(entity: Any, prop: str, language: str | None) -> Any:
    """Return ``entity.prop`` in ``language``, falling back to the base value.

    Args:
        entity: Any dictionary entity carrying a ``translations`` mapping.
        prop: Property name (snake_case, as on the dataclass).
        language: Language code such as ``es_ES`` (``es-ES`` also accepted).

    Returns:
        Translated text, or the untranslated attribute value.
    """
    value = getattr(entity, prop, None)
    translations = getattr(entity, 'translations', None)
    if not translations or not language:
        return value

    texts = _find_best_translation(translations, language)
    if texts and texts.get(prop) is not None:
        return texts[prop]
    return value


def _find_best_translation(translations: dict[str, dict[str, str]],
                           language: str) -> dict[str, str] | None:
    """Find the best translation table for the given language.

    Priority: exact language → language prefix match. No match means the
    base (untranslated) value applies.
    """
    if language in translations:
        return translations[language]

    normalized = language.replace('-', '_')
    if normalized in translations:
        return translations[normalized]

    prefix = normalized.split('_')[0]
    for key, value in translations.items():
        if key.replace('-', '_').split('_')[0] == prefix:
            return value

    return None
