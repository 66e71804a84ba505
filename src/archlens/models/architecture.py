from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Literal, TypedDict

RoleKind = Literal["functional", "governance"]


class RawRaciRef(TypedDict, total=False):
    type: str
    id: str


@dataclass(slots=True, frozen=True)
class RoleRef:
    id: str


@dataclass(slots=True, frozen=True)
class TeamRef:
    id: str


@dataclass(slots=True, frozen=True)
class UnknownRef:
    """Reference whose type is neither ``role`` nor ``team``."""

    type: str
    id: str


RaciRef = RoleRef | TeamRef | UnknownRef


@dataclass(slots=True, frozen=True)
class Raci:
    responsible: RaciRef | None = None
    accountable: RaciRef | None = None
    consulted: tuple[RaciRef, ...] = ()
    informed: tuple[RaciRef, ...] = ()


@dataclass(slots=True, frozen=True)
class EntityInteraction:
    entity_id: str
    operation: str = ""


@dataclass(slots=True, frozen=True)
class ValueChainStage:
    id: str
    name: str = ""
    order: int = 0


@dataclass(slots=True, frozen=True)
class Action:
    id: str
    name: str = ""
    value_chain_stage_id: str = ""
    lane: str = ""
    application_ids: tuple[str, ...] = ()
    raci: Raci | None = None
    entity_interactions: tuple[EntityInteraction, ...] = ()
    description: str = ""


@dataclass(slots=True, frozen=True)
class TeamRole:
    id: str
    name: str = ""
    description: str = ""


@dataclass(slots=True, frozen=True)
class Team:
    id: str
    name: str = ""
    roles: tuple[TeamRole, ...] = ()
    description: str = ""


@dataclass(slots=True, frozen=True)
class GovernanceRole:
    id: str
    name: str = ""
    description: str = ""


@dataclass(slots=True, frozen=True)
class ResolvedRole:
    """Entry of the merged role index.

    Functional roles carry the team that embeds them; governance roles
    have no team.
    """

    id: str
    name: str
    kind: RoleKind
    team_id: str | None = None
    team_name: str | None = None
    description: str = ""


@dataclass(slots=True, frozen=True)
class Person:
    id: str
    name: str = ""
    role_ids: tuple[str, ...] = ()


@dataclass(slots=True, frozen=True)
class Application:
    id: str
    name: str = ""
    category: str = ""
    strategic_classification: str = ""
    knowledge_domain_ids: tuple[str, ...] = ()
    application_owner_role_id: str = ""
    description: str = ""


@dataclass(slots=True, frozen=True)
class KnowledgeDomain:
    id: str
    name: str = ""
    knowledge_owner_role_id: str = ""
    description: str = ""


@dataclass(slots=True, frozen=True)
class EntityAttribute:
    name: str
    type: str = ""
    validation_rules: str | None = None
    retention_policy: str | None = None
    archiving_rules: str | None = None


@dataclass(slots=True, frozen=True)
class BusinessEntity:
    id: str
    name: str = ""
    knowledge_domain_id: str = ""
    attributes: tuple[EntityAttribute, ...] = ()
    description: str = ""


@dataclass(slots=True, frozen=True)
class Integration:
    id: str
    source_application_id: str = ""
    target_application_id: str = ""
    type: str = ""
    maturity: str = ""
    reliability: str = ""
    frequency: str = ""
    entity_interactions: tuple[EntityInteraction, ...] = ()
    description: str = ""


def _text(payload: Mapping[str, Any], key: str) -> str:
    value = payload.get(key)
    return "" if value is None else str(value)


def _optional_text(payload: Mapping[str, Any], key: str) -> str | None:
    value = payload.get(key)
    return None if value is None else str(value)


def _items(payload: Mapping[str, Any], key: str) -> list[Any]:
    value = payload.get(key)
    return list(value) if isinstance(value, (list, tuple)) else []


def _ids(payload: Mapping[str, Any], key: str) -> tuple[str, ...]:
    return tuple(str(item) for item in _items(payload, key) if item is not None)


def to_raci_ref(payload: RawRaciRef | RaciRef | None) -> RaciRef | None:
    if isinstance(payload, (RoleRef, TeamRef, UnknownRef)):
        return payload
    if not isinstance(payload, Mapping):
        return None
    ref_type = _text(payload, "type")
    ref_id = _text(payload, "id")
    if ref_type == "role":
        return RoleRef(id=ref_id)
    if ref_type == "team":
        return TeamRef(id=ref_id)
    return UnknownRef(type=ref_type, id=ref_id)


def _ref_list(payload: Mapping[str, Any], key: str) -> tuple[RaciRef, ...]:
    refs = (to_raci_ref(item) for item in _items(payload, key))
    return tuple(ref for ref in refs if ref is not None)


def to_raci(payload: Any) -> Raci | None:
    if not isinstance(payload, Mapping):
        return None
    return Raci(
        responsible=to_raci_ref(payload.get("responsible")),
        accountable=to_raci_ref(payload.get("accountable")),
        consulted=_ref_list(payload, "consulted"),
        informed=_ref_list(payload, "informed"),
    )


def _interactions(payload: Mapping[str, Any], key: str) -> tuple[EntityInteraction, ...]:
    return tuple(
        EntityInteraction(entity_id=_text(item, "entityId"), operation=_text(item, "operation"))
        for item in _items(payload, key)
        if isinstance(item, dict)
    )


def to_stage(payload: dict[str, Any]) -> ValueChainStage:
    try:
        order = int(payload.get("order", 0) or 0)
    except (TypeError, ValueError):
        order = 0
    return ValueChainStage(id=_text(payload, "id"), name=_text(payload, "name"), order=order)


def to_action(payload: dict[str, Any]) -> Action:
    return Action(
        id=_text(payload, "id"),
        name=_text(payload, "name"),
        value_chain_stage_id=_text(payload, "valueChainStageId"),
        lane=_text(payload, "lane"),
        application_ids=_ids(payload, "applicationIds"),
        raci=to_raci(payload.get("raci")),
        entity_interactions=_interactions(payload, "entityInteractions"),
        description=_text(payload, "description"),
    )


def to_team(payload: dict[str, Any]) -> Team:
    roles = tuple(
        TeamRole(id=_text(role, "id"), name=_text(role, "name"), description=_text(role, "description"))
        for role in _items(payload, "roles")
        if isinstance(role, dict)
    )
    return Team(
        id=_text(payload, "id"),
        name=_text(payload, "name"),
        roles=roles,
        description=_text(payload, "description"),
    )


def to_governance_role(payload: dict[str, Any]) -> GovernanceRole:
    return GovernanceRole(
        id=_text(payload, "id"),
        name=_text(payload, "name"),
        description=_text(payload, "description"),
    )


def to_person(payload: dict[str, Any]) -> Person:
    return Person(id=_text(payload, "id"), name=_text(payload, "name"), role_ids=_ids(payload, "roleIds"))


def to_application(payload: dict[str, Any]) -> Application:
    return Application(
        id=_text(payload, "id"),
        name=_text(payload, "name"),
        category=_text(payload, "category"),
        strategic_classification=_text(payload, "strategicClassification"),
        knowledge_domain_ids=_ids(payload, "knowledgeDomainIds"),
        application_owner_role_id=_text(payload, "applicationOwnerRoleId"),
        description=_text(payload, "description"),
    )


def to_knowledge_domain(payload: dict[str, Any]) -> KnowledgeDomain:
    return KnowledgeDomain(
        id=_text(payload, "id"),
        name=_text(payload, "name"),
        knowledge_owner_role_id=_text(payload, "knowledgeOwnerRoleId"),
        description=_text(payload, "description"),
    )


def to_business_entity(payload: dict[str, Any]) -> BusinessEntity:
    attributes = tuple(
        EntityAttribute(
            name=_text(attr, "name"),
            type=_text(attr, "type"),
            validation_rules=_optional_text(attr, "validationRules"),
            retention_policy=_optional_text(attr, "retentionPolicy"),
            archiving_rules=_optional_text(attr, "archivingRules"),
        )
        for attr in _items(payload, "attributes")
        if isinstance(attr, dict)
    )
    return BusinessEntity(
        id=_text(payload, "id"),
        name=_text(payload, "name"),
        knowledge_domain_id=_text(payload, "knowledgeDomainId"),
        attributes=attributes,
        description=_text(payload, "description"),
    )


def to_integration(payload: dict[str, Any]) -> Integration:
    return Integration(
        id=_text(payload, "id"),
        source_application_id=_text(payload, "sourceApplicationId"),
        target_application_id=_text(payload, "targetApplicationId"),
        type=_text(payload, "type"),
        maturity=_text(payload, "maturity"),
        reliability=_text(payload, "reliability"),
        frequency=_text(payload, "frequency"),
        entity_interactions=_interactions(payload, "entityInteractions"),
        description=_text(payload, "description"),
    )
