from __future__ import annotations

from typing import Any

from archlens.core import ModelSnapshot, count_by_level, resolve_raci, resolve_raci_ref, risk_of
from archlens.core.display import (
    CATEGORY_ORDER,
    LANE_DIVIDERS,
    LANES,
    TIMEK_ORDER,
    category_info,
    frequency_label,
    lane_info,
    maturity_info,
    operation_label,
    risk_class,
    risk_color,
    risk_label,
    timek_info,
)
from archlens.core.index import (
    actions_by_stage_and_lane,
    build_apps_by_domain_map,
    build_entities_by_domain_map,
    integrations_by_app,
)
from archlens.core.risk import RISK_LEVELS, sort_by_risk
from archlens.models import Action, Application, BusinessEntity, EntityInteraction, Integration, KnowledgeDomain


def _risk_badge(level: str) -> dict[str, str]:
    return {
        "level": level,
        "label": risk_label(level),
        "color": risk_color(level),
        "class_name": risk_class(level),
    }


def _role_name(snapshot: ModelSnapshot, role_id: str) -> str | None:
    role = snapshot.role_index.get(role_id)
    return role.name if role else None


def _app_ref(snapshot: ModelSnapshot, app_id: str) -> dict[str, Any]:
    app = snapshot.app_index.get(app_id)
    return {"id": app_id, "name": app.name if app else app_id, "found": app is not None}


def _interactions(snapshot: ModelSnapshot, interactions: tuple[EntityInteraction, ...]) -> list[dict[str, Any]]:
    rows = []
    for interaction in interactions:
        entity = snapshot.entity_index.get(interaction.entity_id)
        rows.append(
            {
                "entity_id": interaction.entity_id,
                "entity_name": entity.name if entity else interaction.entity_id,
                "operation": interaction.operation,
                "operation_label": operation_label(interaction.operation),
            }
        )
    return rows


def build_risk_summary(snapshot: ModelSnapshot) -> dict[str, Any]:
    return {
        **snapshot.risks.to_payload(),
        "counts": {tier: count_by_level(risks) for tier, risks in snapshot.risks.tiers().items()},
    }


def _action_card(snapshot: ModelSnapshot, action: Action) -> dict[str, Any]:
    raci = action.raci
    return {
        "id": action.id,
        "name": action.name,
        "risk": _risk_badge(risk_of(snapshot.risks.action_risks, action.id)),
        "responsible": resolve_raci_ref(raci.responsible if raci else None, snapshot.role_index, snapshot.team_index),
        "accountable": resolve_raci_ref(raci.accountable if raci else None, snapshot.role_index, snapshot.team_index),
        "applications": [_app_ref(snapshot, app_id)["name"] for app_id in action.application_ids],
    }


def build_blueprint_viewmodel(snapshot: ModelSnapshot) -> dict[str, Any]:
    """Service blueprint grid: one row per lane, one column per stage in stage order."""
    stages = snapshot.sorted_stages
    actions = snapshot.dataset.actions
    dividers = {divider["after_lane"]: divider for divider in LANE_DIVIDERS}

    lanes = []
    for lane in LANES:
        cells = [
            {
                "stage_id": stage.id,
                "actions": [
                    _action_card(snapshot, action)
                    for action in actions_by_stage_and_lane(actions, stage.id, lane["id"])
                ],
            }
            for stage in stages
        ]
        divider = dividers.get(lane["id"])
        lanes.append(
            {
                **lane_info(lane["id"]),
                "id": lane["id"],
                "cells": cells,
                "divider_after": dict(divider) if divider else None,
            }
        )

    return {
        "stages": [
            {
                "id": stage.id,
                "name": stage.name,
                "order": stage.order,
                "risk": _risk_badge(risk_of(snapshot.risks.stage_risks, stage.id)),
            }
            for stage in stages
        ],
        "lanes": lanes,
    }


def _app_card(snapshot: ModelSnapshot, app: Application) -> dict[str, Any]:
    domains = [snapshot.domain_index[did] for did in app.knowledge_domain_ids if did in snapshot.domain_index]
    return {
        "id": app.id,
        "name": app.name,
        "category": app.category,
        "category_style": category_info(app.category),
        "timek": {"value": app.strategic_classification, **timek_info(app.strategic_classification)},
        "owner": _role_name(snapshot, app.application_owner_role_id),
        "domains": [domain.name for domain in domains],
        "risk": _risk_badge(risk_of(snapshot.risks.app_risks, app.id)),
    }


def _section_rank(order: tuple[str, ...], key: str) -> int:
    # sections outside the fixed order come first
    return order.index(key) if key in order else -1


def _section_key(app: Application, group_by: str) -> str | None:
    if group_by == "category":
        return app.category or "Other"
    key = app.strategic_classification or "keep"
    return key if key in TIMEK_ORDER else None


def build_landscape_viewmodel(snapshot: ModelSnapshot, *, group_by: str = "category", q: str = "") -> dict[str, Any]:
    group_by = "timek" if group_by == "timek" else "category"
    needle = (q or "").strip().lower()
    apps = [app for app in snapshot.dataset.applications if needle in app.name.lower()]

    groups: dict[str, list[Application]] = {}
    for app in apps:
        key = _section_key(app, group_by)
        if key is not None:
            groups.setdefault(key, []).append(app)

    order = TIMEK_ORDER if group_by == "timek" else CATEGORY_ORDER
    sections = []
    for key in sorted(groups, key=lambda name: _section_rank(order, name)):
        sections.append(
            {
                "key": key,
                "label": timek_info(key)["label"] if group_by == "timek" else key,
                "applications": [_app_card(snapshot, app) for app in groups[key]],
            }
        )
    return {"group_by": group_by, "q": q, "total": len(apps), "sections": sections}


def _integration_row(snapshot: ModelSnapshot, integration: Integration) -> dict[str, Any]:
    return {
        "id": integration.id,
        "source": _app_ref(snapshot, integration.source_application_id),
        "target": _app_ref(snapshot, integration.target_application_id),
        "type": integration.type,
        "maturity": {"value": integration.maturity, **maturity_info(integration.maturity)},
        "reliability": integration.reliability,
        "frequency": {"value": integration.frequency, "label": frequency_label(integration.frequency)},
        "entities": _interactions(snapshot, integration.entity_interactions),
        "risk": _risk_badge(risk_of(snapshot.risks.integration_risks, integration.id)),
    }


def build_integration_map_viewmodel(
    snapshot: ModelSnapshot,
    *,
    risk_levels: list[str] | None = None,
    app_id: str = "",
) -> dict[str, Any]:
    """Integrations filtered by risk level and participating application, most severe first."""
    wanted = {level for level in (risk_levels or []) if level in RISK_LEVELS}
    integrations = list(snapshot.dataset.integrations)
    if app_id:
        integrations = integrations_by_app(integrations, app_id)
    if wanted:
        integrations = [
            item for item in integrations if risk_of(snapshot.risks.integration_risks, item.id) in wanted
        ]

    app_ids = sorted(
        {
            app
            for item in snapshot.dataset.integrations
            for app in (item.source_application_id, item.target_application_id)
            if app
        }
    )
    return {
        "filters": {"risk": sorted(wanted, key=RISK_LEVELS.index), "app": app_id},
        "applications": app_ids,
        "integrations": [
            _integration_row(snapshot, item) for item in sort_by_risk(integrations, snapshot.risks.integration_risks)
        ],
    }


def _entity_card(entity: BusinessEntity) -> dict[str, Any]:
    return {
        "id": entity.id,
        "name": entity.name,
        "attributes": [
            {
                "name": attr.name,
                "type": attr.type,
                "validation_rules": attr.validation_rules,
                "retention_policy": attr.retention_policy,
                "archiving_rules": attr.archiving_rules,
            }
            for attr in entity.attributes
        ],
    }


def _domain_card(
    snapshot: ModelSnapshot,
    domain: KnowledgeDomain,
    entities: list[BusinessEntity],
    apps: list[Application],
) -> dict[str, Any]:
    return {
        "id": domain.id,
        "name": domain.name,
        "description": domain.description,
        "owner": _role_name(snapshot, domain.knowledge_owner_role_id),
        "entities": [_entity_card(entity) for entity in entities],
        "applications": [{"id": app.id, "name": app.name} for app in apps],
    }


def build_domains_viewmodel(snapshot: ModelSnapshot) -> dict[str, Any]:
    domains = snapshot.dataset.domains
    entities = build_entities_by_domain_map(domains, snapshot.dataset.entities)
    apps = build_apps_by_domain_map(domains, snapshot.dataset.applications)
    return {
        "domains": [_domain_card(snapshot, domain, entities[domain.id], apps[domain.id]) for domain in domains]
    }


def _action_detail(snapshot: ModelSnapshot, item_id: str) -> dict[str, Any] | None:
    action = snapshot.action_index.get(item_id)
    if action is None:
        return None
    stage = snapshot.stage_index.get(action.value_chain_stage_id)
    return {
        "kind": "action",
        "id": action.id,
        "name": action.name,
        "description": action.description,
        "stage": {"id": stage.id, "name": stage.name} if stage else None,
        "lane": {"value": action.lane, **lane_info(action.lane)},
        "raci": resolve_raci(action.raci, snapshot.role_index, snapshot.team_index).to_payload(),
        "applications": [
            {"id": app_id, "name": snapshot.app_index[app_id].name}
            for app_id in action.application_ids
            if app_id in snapshot.app_index
        ],
        "entities": _interactions(snapshot, action.entity_interactions),
        "risk": _risk_badge(risk_of(snapshot.risks.action_risks, action.id)),
    }


def _application_detail(snapshot: ModelSnapshot, item_id: str) -> dict[str, Any] | None:
    app = snapshot.app_index.get(item_id)
    if app is None:
        return None
    integrations = snapshot.dataset.integrations
    return {
        **_app_card(snapshot, app),
        "kind": "application",
        "description": app.description,
        "inbound": [_integration_row(snapshot, i) for i in integrations if i.target_application_id == app.id],
        "outbound": [_integration_row(snapshot, i) for i in integrations if i.source_application_id == app.id],
    }


def _domain_detail(snapshot: ModelSnapshot, item_id: str) -> dict[str, Any] | None:
    domain = snapshot.domain_index.get(item_id)
    if domain is None:
        return None
    entities = build_entities_by_domain_map([domain], snapshot.dataset.entities)[domain.id]
    apps = build_apps_by_domain_map([domain], snapshot.dataset.applications)[domain.id]
    return {**_domain_card(snapshot, domain, entities, apps), "kind": "domain"}


def _integration_detail(snapshot: ModelSnapshot, item_id: str) -> dict[str, Any] | None:
    integration = snapshot.integration_index.get(item_id)
    if integration is None:
        return None
    return {**_integration_row(snapshot, integration), "kind": "integration", "description": integration.description}


def _entity_detail(snapshot: ModelSnapshot, item_id: str) -> dict[str, Any] | None:
    entity = snapshot.entity_index.get(item_id)
    if entity is None:
        return None
    domain = snapshot.domain_index.get(entity.knowledge_domain_id)
    actions = [
        action
        for action in snapshot.dataset.actions
        if any(interaction.entity_id == entity.id for interaction in action.entity_interactions)
    ]
    apps = build_apps_by_domain_map([domain], snapshot.dataset.applications)[domain.id] if domain else []
    return {
        **_entity_card(entity),
        "kind": "entity",
        "description": entity.description,
        "domain": {"id": domain.id, "name": domain.name} if domain else None,
        "actions": [{"id": action.id, "name": action.name} for action in actions],
        "applications": [{"id": app.id, "name": app.name} for app in apps],
    }


DETAIL_BUILDERS = {
    "actions": _action_detail,
    "applications": _application_detail,
    "domains": _domain_detail,
    "integrations": _integration_detail,
    "entities": _entity_detail,
}


def build_detail_viewmodel(snapshot: ModelSnapshot, kind: str, item_id: str) -> dict[str, Any] | None:
    builder = DETAIL_BUILDERS.get(kind)
    if builder is None:
        return None
    return builder(snapshot, item_id)
