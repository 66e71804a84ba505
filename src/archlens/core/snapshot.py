from __future__ import annotations

from dataclasses import dataclass

from ..models import (
    Action,
    Application,
    ArchitectureDataset,
    BusinessEntity,
    Integration,
    KnowledgeDomain,
    Person,
    ResolvedRole,
    Team,
    ValueChainStage,
)
from .index import build_index, build_role_index
from .risk import RiskReport, calculate_all_risks


@dataclass(slots=True, frozen=True)
class ModelSnapshot:
    """Indexes and risk tiers computed once for a loaded dataset."""

    dataset: ArchitectureDataset
    stage_index: dict[str, ValueChainStage]
    action_index: dict[str, Action]
    team_index: dict[str, Team]
    role_index: dict[str, ResolvedRole]
    person_index: dict[str, Person]
    app_index: dict[str, Application]
    domain_index: dict[str, KnowledgeDomain]
    entity_index: dict[str, BusinessEntity]
    integration_index: dict[str, Integration]
    risks: RiskReport

    @property
    def sorted_stages(self) -> list[ValueChainStage]:
        return sorted(self.dataset.stages, key=lambda stage: stage.order)


def build_snapshot(dataset: ArchitectureDataset) -> ModelSnapshot:
    return ModelSnapshot(
        dataset=dataset,
        stage_index=build_index(dataset.stages),
        action_index=build_index(dataset.actions),
        team_index=build_index(dataset.teams),
        role_index=build_role_index(dataset.teams, dataset.roles),
        person_index=build_index(dataset.persons),
        app_index=build_index(dataset.applications),
        domain_index=build_index(dataset.domains),
        entity_index=build_index(dataset.entities),
        integration_index=build_index(dataset.integrations),
        risks=calculate_all_risks(
            dataset.integrations,
            dataset.applications,
            dataset.actions,
            dataset.stages,
        ),
    )
