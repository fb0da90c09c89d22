"""Session summary: who the caller is and what they can switch to.

This is the one composite aggregation that degrades instead of failing:
each per-role organization lookup and per-organization warehouse lookup is
captured as a :class:`Result`, and a failed branch becomes an empty list.
"""

from __future__ import annotations

import logging
from typing import Any

from ui_metadata.assembly.labels_assembler import LanguageAssembler
from ui_metadata.assembly.scope import AssemblyScope
from ui_metadata.domain.enums import EntityKind
from ui_metadata.domain.models import Organization, Role
from ui_metadata.domain.result import Result
from ui_metadata.errors import AssemblyError, NotFoundError
from ui_metadata.resolution.projection import project

logger = logging.getLogger(__name__)


class SessionAssembler:
    """Builds ``{user, role, roles, languages}`` for the scope's context.

    Args:
        scope: Per-request collaborators.
    """

    def __init__(self, scope: AssemblyScope) -> None:
        self._scope = scope
        self._repository = scope.repository

    def build(self) -> dict[str, Any]:
        """Assemble the session summary.

        Raises:
            NotFoundError: If the context's user or role does not exist.
        """
        context = self._scope.context
        language = self._scope.language

        user = None
        if context.user_id is not None:
            user = self._repository.get(EntityKind.USER, context.user_id)
            if user is None:
                raise NotFoundError('User', context.user_id)

        role = self._repository.get(EntityKind.ROLE, context.role_id)
        if role is None:
            raise NotFoundError('Role', context.role_id)

        return {
            'user': project(user, language) if user is not None else None,
            'role': project(role, language),
            'roles': [self.build_role(r) for r in self._user_roles(role)],
            'languages': LanguageAssembler(self._scope).build(),
        }

    def build_role(self, role: Role) -> dict[str, Any]:
        organizations = Result.capture(self._organizations, role).value_or([], f'role {role.id} organizations')
        return {
            'id': role.id,
            'name': role.name,
            'organizations': [self.build_organization(org) for org in organizations],
        }

    def build_organization(self, organization: Organization) -> dict[str, Any]:
        warehouses = Result.capture(self._warehouses, organization).value_or(
            [], f'organization {organization.id} warehouses',
        )
        return {'id': organization.id, 'name': organization.name, 'warehouses': warehouses}

    # ── Lookups ─────────────────────────────────────────────────────────

    def _user_roles(self, current: Role) -> list[Role]:
        """Active roles granted to the user; only the current role when there is no user."""
        user_id = self._scope.context.user_id
        if user_id is None:
            return [current]

        roles = []
        for grant in self._repository.query(EntityKind.USER_ROLE, lambda g: g.user_id == user_id and g.active):
            role = self._repository.get(EntityKind.ROLE, grant.role_id)
            if role is None:
                logger.warning("User role %s references unknown role %s, skipping", grant.id, grant.role_id)
                continue
            if role.active:
                roles.append(role)
        return roles

    def _organizations(self, role: Role) -> list[Organization]:
        organizations = []
        grants = self._repository.query(EntityKind.ROLE_ORGANIZATION, lambda g: g.role_id == role.id and g.active)
        for grant in grants:
            organization = self._repository.get(EntityKind.ORGANIZATION, grant.organization_id)
            if organization is None:
                raise AssemblyError(f"Role organization {grant.id} references unknown organization "
                                    f"{grant.organization_id}")
            if organization.active:
                organizations.append(organization)
        return organizations

    def _warehouses(self, organization: Organization) -> list[dict[str, Any]]:
        warehouses = self._repository.query(
            EntityKind.WAREHOUSE, lambda w: w.organization_id == organization.id and w.active,
        )
        return [{'id': w.id, 'name': w.name} for w in warehouses]
