from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import Any, TypeVar

from ..models import (
    Action,
    Application,
    BusinessEntity,
    GovernanceRole,
    Integration,
    KnowledgeDomain,
    Raci,
    ResolvedRole,
    RoleRef,
    Team,
    TeamRef,
    to_raci,
    to_raci_ref,
)

T = TypeVar("T")

NOT_AVAILABLE = "—"


@dataclass(slots=True, frozen=True)
class ResolvedRaci:
    responsible: str = NOT_AVAILABLE
    accountable: str = NOT_AVAILABLE
    consulted: tuple[str, ...] = ()
    informed: tuple[str, ...] = ()

    def to_payload(self) -> dict[str, Any]:
        return {
            "responsible": self.responsible,
            "accountable": self.accountable,
            "consulted": list(self.consulted),
            "informed": list(self.informed),
        }


def read_field(item: Any, attribute: str, key: str | None = None) -> Any:
    """Read ``attribute`` from a model object, or the camelCase ``key`` from a raw mapping."""
    if isinstance(item, Mapping):
        return item.get(key or attribute)
    return getattr(item, attribute, None)


def _item_id(item: Any) -> Any:
    return read_field(item, "id")


def build_index(collection: Iterable[T] | None) -> dict[str, T]:
    """Map each item's id to the item. Items without an id are skipped; on duplicates the last one wins."""
    index: dict[str, T] = {}
    for item in collection or ():
        item_id = _item_id(item)
        if item_id is None or item_id == "":
            continue
        index[str(item_id)] = item
    return index


def _text_field(item: Any, attribute: str) -> str:
    value = read_field(item, attribute)
    return "" if value is None else str(value)


def _functional_roles(teams: Iterable[Team | Mapping[str, Any]]) -> dict[str, ResolvedRole]:
    roles: dict[str, ResolvedRole] = {}
    for team in teams or ():
        team_roles = read_field(team, "roles")
        if not isinstance(team_roles, (list, tuple)):
            continue
        for role in team_roles:
            role_id = _text_field(role, "id")
            if not role_id:
                continue
            roles[role_id] = ResolvedRole(
                id=role_id,
                name=_text_field(role, "name"),
                kind="functional",
                team_id=_text_field(team, "id"),
                team_name=_text_field(team, "name"),
                description=_text_field(role, "description"),
            )
    return roles


def _governance_roles(governance_roles: Iterable[GovernanceRole | Mapping[str, Any]]) -> dict[str, ResolvedRole]:
    roles: dict[str, ResolvedRole] = {}
    for role in governance_roles or ():
        role_id = _text_field(role, "id")
        if not role_id:
            continue
        roles[role_id] = ResolvedRole(
            id=role_id,
            name=_text_field(role, "name"),
            kind="governance",
            description=_text_field(role, "description"),
        )
    return roles


def build_role_index(
    teams: Iterable[Team | Mapping[str, Any]] | None,
    governance_roles: Iterable[GovernanceRole | Mapping[str, Any]] | None,
) -> dict[str, ResolvedRole]:
    """Merge team-embedded functional roles and governance roles into one lookup.

    Governance roles take precedence when both sources use the same id.
    Model objects and raw camelCase mappings are both accepted.
    """
    functional = _functional_roles(teams or ())
    governance = _governance_roles(governance_roles or ())
    return {**functional, **governance}


def _display_name(entry: Any, fallback: str) -> str:
    if entry is None:
        return fallback
    name = read_field(entry, "name")
    return str(name) if name else fallback


def resolve_raci_ref(
    ref: Any,
    role_index: Mapping[str, ResolvedRole] | None,
    team_index: Mapping[str, Team] | None,
) -> str:
    """Resolve a RACI reference to a display name.

    Accepts a ``RaciRef`` or a raw ``{"type", "id"}`` mapping. Returns the
    placeholder when there is no reference and the raw id when it cannot be
    resolved.
    """
    ref = to_raci_ref(ref)
    if ref is None:
        return NOT_AVAILABLE
    if isinstance(ref, TeamRef):
        return _display_name((team_index or {}).get(ref.id), ref.id)
    if isinstance(ref, RoleRef):
        return _display_name((role_index or {}).get(ref.id), ref.id)
    return ref.id


def resolve_raci(
    raci: Raci | Mapping[str, Any] | None,
    role_index: Mapping[str, ResolvedRole] | None,
    team_index: Mapping[str, Team] | None,
) -> ResolvedRaci:
    if isinstance(raci, Mapping):
        raci = to_raci(raci)
    if not isinstance(raci, Raci):
        return ResolvedRaci()
    return ResolvedRaci(
        responsible=resolve_raci_ref(raci.responsible, role_index, team_index),
        accountable=resolve_raci_ref(raci.accountable, role_index, team_index),
        consulted=tuple(resolve_raci_ref(ref, role_index, team_index) for ref in raci.consulted),
        informed=tuple(resolve_raci_ref(ref, role_index, team_index) for ref in raci.informed),
    )


def get_by_id(collection: Iterable[T] | None, item_id: str) -> T | None:
    for item in collection or ():
        if _item_id(item) == item_id:
            return item
    return None


def actions_by_stage(actions: Iterable[Action], stage_id: str) -> list[Action]:
    return [action for action in actions if action.value_chain_stage_id == stage_id]


def actions_by_stage_and_lane(actions: Iterable[Action], stage_id: str, lane: str) -> list[Action]:
    return [action for action in actions if action.value_chain_stage_id == stage_id and action.lane == lane]


def apps_by_domain(applications: Iterable[Application], domain_id: str) -> list[Application]:
    return [app for app in applications if domain_id in app.knowledge_domain_ids]


def entities_by_domain(entities: Iterable[BusinessEntity], domain_id: str) -> list[BusinessEntity]:
    return [entity for entity in entities if entity.knowledge_domain_id == domain_id]


def build_entities_by_domain_map(
    domains: Iterable[KnowledgeDomain],
    entities: Iterable[BusinessEntity],
) -> dict[str, list[BusinessEntity]]:
    entities = list(entities)
    return {domain.id: entities_by_domain(entities, domain.id) for domain in domains}


def build_apps_by_domain_map(
    domains: Iterable[KnowledgeDomain],
    applications: Iterable[Application],
) -> dict[str, list[Application]]:
    applications = list(applications)
    return {domain.id: apps_by_domain(applications, domain.id) for domain in domains}


def integrations_by_app(integrations: Iterable[Integration], app_id: str) -> list[Integration]:
    return [
        integration
        for integration in integrations
        if integration.source_application_id == app_id or integration.target_application_id == app_id
    ]
