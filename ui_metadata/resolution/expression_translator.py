"""Legacy logic expression translation.

Legacy display/read-only logic looks like::

    @DocStatus@='DR' & (@Processed@!'Y' | @#IsAdmin@=Y)

and is translated into the client's expression syntax::

    currentValues['docStatus'] === 'DR' && (currentValues['processed'] !== 'Y' || context['#IsAdmin'] === 'Y')
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Protocol

from ui_metadata.dictionary.repository import DictionaryRepository
from ui_metadata.domain.constants import LOGIC_TOKEN_RE
from ui_metadata.domain.enums import EntityKind
from ui_metadata.errors import TranslationError

logger = logging.getLogger(__name__)

NameResolver = Callable[[str], 'str | None']

_OPERATORS = {
    '=': '===',
    '!': '!==',
    '!=': '!==',
    '<>': '!==',
    '<': '<',
    '>': '>',
    '<=': '<=',
    '>=': '>=',
    '&': '&&',
    '|': '||',
}


class ExpressionTranslator(Protocol):
    def translate(self, expression: str, name_resolver: NameResolver | None = None) -> str:
        """Translate a non-blank legacy expression; may raise."""


class LogicExpressionTranslator:
    """Tokenizing translator for legacy boolean logic."""

    def translate(self, expression: str, name_resolver: NameResolver | None = None) -> str:
        tokens = self._tokenize(expression)
        if not tokens:
            raise TranslationError("Empty logic expression", expression)

        parts: list[str] = []
        depth = 0
        # Operands and binary operators must alternate, starting and ending on an operand
        expect_operand = True
        for kind, text in tokens:
            if kind == 'paren':
                if (text == '(') != expect_operand:
                    raise TranslationError(f"Misplaced '{text}' in logic expression: {expression}", expression)
                depth += 1 if text == '(' else -1
                if depth < 0:
                    raise TranslationError(f"Unbalanced ')' in logic expression: {expression}", expression)
                parts.append(text)
                continue

            if (kind == 'operator') == expect_operand:
                missing = 'operand' if expect_operand else 'operator'
                raise TranslationError(f"Missing {missing} before '{text}' in logic expression: {expression}",
                                       expression)
            expect_operand = kind == 'operator'
            if kind == 'variable':
                parts.append(self._variable(text[1:-1], name_resolver))
            elif kind == 'operator':
                parts.append(_OPERATORS[text])
            elif kind == 'string':
                parts.append("'" + text[1:-1].replace("'", "\\'") + "'")
            elif kind == 'number':
                parts.append(text)
            else:
                parts.append(self._literal(text))

        if expect_operand:
            raise TranslationError(f"Logic expression ends without an operand: {expression}", expression)
        if depth != 0:
            raise TranslationError(f"Unbalanced '(' in logic expression: {expression}", expression)
        return self._join(parts)

    @staticmethod
    def _tokenize(expression: str) -> list[tuple[str, str]]:
        tokens = []
        pos = 0
        while pos < len(expression):
            match = LOGIC_TOKEN_RE.match(expression, pos)
            if match is None:
                raise TranslationError(
                    f"Unexpected character {expression[pos]!r} at position {pos} in: {expression}",
                    expression,
                )
            if match.lastgroup != 'ws':
                tokens.append((match.lastgroup, match.group()))
            pos = match.end()
        return tokens

    @staticmethod
    def _variable(name: str, name_resolver: NameResolver | None) -> str:
        if name[0] in '#$':
            return f"context['{name}']"
        prop = name_resolver(name) if name_resolver else None
        if prop is None:
            prop = name[:1].lower() + name[1:]
        return f"currentValues['{prop}']"

    @staticmethod
    def _literal(text: str) -> str:
        if text in ('true', 'false', 'null'):
            return text
        return f"'{text}'"

    @staticmethod
    def _join(parts: list[str]) -> str:
        out = ''
        for part in parts:
            if out and not out.endswith('(') and part != ')':
                out += ' '
            out += part
        return out


def column_name_resolver(repository: DictionaryRepository, table_id: str | None) -> NameResolver:
    """Resolve ``@ColumnName@`` tokens to entity property names of a table."""
    names = {
        c.db_column_name.lower(): c.property_name
        for c in repository.query(EntityKind.COLUMN, lambda c: c.table_id == table_id)
        if c.property_name
    }
    return lambda name: names.get(name.lower())


def translate_logic(translator: ExpressionTranslator, expression: str | None,
                    name_resolver: NameResolver | None = None) -> str | None:
    """Translate ``expression``, or return None when it is null or blank.

    Raises:
        TranslationError: If the translator fails for any reason.
    """
    if expression is None or not expression.strip():
        return None
    try:
        return translator.translate(expression, name_resolver)
    except TranslationError:
        raise
    except Exception as e:
        logger.debug("Translator failed on %r", expression, exc_info=True)
        raise TranslationError(f"Cannot translate logic expression '{expression}': {e}", expression) from e
