"""Risk propagation across the architecture layers.

Integration quality (maturity x reliability) gives each integration a risk
level. The level is then propagated upwards, each tier taking the worst
level of the tier below:

    integration -> application -> action -> value-chain stage
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Literal, TypeVar

from .index import read_field

T = TypeVar("T")

RiskLevel = Literal["none", "low", "medium", "high", "critical"]

RISK_LEVELS: tuple[RiskLevel, ...] = ("none", "low", "medium", "high", "critical")

_RANK: Mapping[str, int] = MappingProxyType({level: rank for rank, level in enumerate(RISK_LEVELS)})

RISK_MATRIX: Mapping[str, Mapping[str, RiskLevel]] = MappingProxyType(
    {
        "automated": MappingProxyType({"high": "none", "medium": "low", "low": "medium"}),
        "semi-automated": MappingProxyType({"high": "low", "medium": "medium", "low": "high"}),
        "manual-with-template": MappingProxyType({"high": "medium", "medium": "high", "low": "high"}),
        "manual-adhoc": MappingProxyType({"high": "high", "medium": "critical", "low": "critical"}),
    }
)


@dataclass(slots=True, frozen=True)
class RiskReport:
    integration_risks: dict[str, RiskLevel] = field(default_factory=dict)
    app_risks: dict[str, RiskLevel] = field(default_factory=dict)
    action_risks: dict[str, RiskLevel] = field(default_factory=dict)
    stage_risks: dict[str, RiskLevel] = field(default_factory=dict)

    def to_payload(self) -> dict[str, dict[str, str]]:
        return {
            "integrationRisks": dict(self.integration_risks),
            "appRisks": dict(self.app_risks),
            "actionRisks": dict(self.action_risks),
            "stageRisks": dict(self.stage_risks),
        }

    def tiers(self) -> dict[str, dict[str, RiskLevel]]:
        return {
            "integrations": self.integration_risks,
            "applications": self.app_risks,
            "actions": self.action_risks,
            "stages": self.stage_risks,
        }


def risk_rank(level: Any) -> int:
    """Position of ``level`` in the severity order; unknown levels rank as ``none``."""
    if not isinstance(level, str):
        return 0
    return _RANK.get(level, 0)


def higher_risk(a: Any, b: Any) -> RiskLevel:
    return RISK_LEVELS[max(risk_rank(a), risk_rank(b))]


def _id_of(item: Any) -> str | None:
    item_id = read_field(item, "id")
    return item_id if isinstance(item_id, str) and item_id else None


def _sequence(value: Any) -> tuple[Any, ...]:
    if isinstance(value, (str, bytes, Mapping)) or not isinstance(value, Iterable):
        return ()
    return tuple(value)


def calculate_integration_risk(integration: Any) -> RiskLevel:
    maturity = read_field(integration, "maturity")
    reliability = read_field(integration, "reliability")
    if not isinstance(maturity, str) or not isinstance(reliability, str):
        return "none"
    row = RISK_MATRIX.get(maturity)
    if row is None:
        return "none"
    return row.get(reliability, "none")


def calculate_application_risk(app_id: str, integrations: Iterable[Any] | None) -> RiskLevel:
    worst: RiskLevel = "none"
    for integration in _sequence(integrations):
        source = read_field(integration, "source_application_id", "sourceApplicationId")
        target = read_field(integration, "target_application_id", "targetApplicationId")
        if app_id in (source, target):
            worst = higher_risk(worst, calculate_integration_risk(integration))
    return worst


def calculate_action_risk(action: Any, app_risks: Mapping[str, str] | None) -> RiskLevel:
    worst: RiskLevel = "none"
    for app_id in _sequence(read_field(action, "application_ids", "applicationIds")):
        if isinstance(app_id, str):
            worst = higher_risk(worst, risk_of(app_risks, app_id))
    return worst


def calculate_stage_risk(
    stage_id: str,
    actions: Iterable[Any] | None,
    action_risks: Mapping[str, str] | None,
) -> RiskLevel:
    worst: RiskLevel = "none"
    for action in _sequence(actions):
        if read_field(action, "value_chain_stage_id", "valueChainStageId") == stage_id:
            worst = higher_risk(worst, risk_of(action_risks, _id_of(action)))
    return worst


def _ids(items: Iterable[Any] | None) -> list[str]:
    ids = (_id_of(item) for item in _sequence(items))
    return [item_id for item_id in ids if item_id]


def calculate_all_risks(
    integrations: Iterable[Any] | None,
    applications: Iterable[Any] | None,
    actions: Iterable[Any] | None,
    stages: Iterable[Any] | None,
) -> RiskReport:
    """Compute every tier, each one reading only the results of the tier below.

    Items may be model objects or raw camelCase mappings. Items without a
    string id are left out of the maps.
    """
    integrations = _sequence(integrations)
    actions = _sequence(actions)

    integration_risks = {
        integration_id: calculate_integration_risk(integration)
        for integration, integration_id in ((item, _id_of(item)) for item in integrations)
        if integration_id
    }
    app_risks = {app_id: calculate_application_risk(app_id, integrations) for app_id in _ids(applications)}
    action_risks = {
        action_id: calculate_action_risk(action, app_risks)
        for action, action_id in ((item, _id_of(item)) for item in actions)
        if action_id
    }
    stage_risks = {stage_id: calculate_stage_risk(stage_id, actions, action_risks) for stage_id in _ids(stages)}
    return RiskReport(
        integration_risks=integration_risks,
        app_risks=app_risks,
        action_risks=action_risks,
        stage_risks=stage_risks,
    )


def risk_of(risks: Mapping[str, str] | None, key: Any) -> RiskLevel:
    """Read a risk map; a missing key or an unknown value reads as ``none``."""
    if not isinstance(risks, Mapping) or not isinstance(key, str):
        return "none"
    return RISK_LEVELS[risk_rank(risks.get(key))]


def count_by_level(risks: Mapping[str, str]) -> dict[str, int]:
    counts = {level: 0 for level in RISK_LEVELS}
    for value in risks.values():
        counts[RISK_LEVELS[risk_rank(value)]] += 1
    return counts


def sort_by_risk(items: Sequence[T], risks: Mapping[str, str]) -> list[T]:
    """Most severe first; ties keep their input order."""
    return sorted(items, key=lambda item: -risk_rank(risk_of(risks, _id_of(item))))
