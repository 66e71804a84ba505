from __future__ import annotations

from dataclasses import dataclass

from .architecture import (
    Action,
    Application,
    BusinessEntity,
    GovernanceRole,
    Integration,
    KnowledgeDomain,
    Person,
    Team,
    ValueChainStage,
)


@dataclass(slots=True, frozen=True)
class ArchitectureDataset:
    stages: tuple[ValueChainStage, ...] = ()
    actions: tuple[Action, ...] = ()
    teams: tuple[Team, ...] = ()
    roles: tuple[GovernanceRole, ...] = ()
    persons: tuple[Person, ...] = ()
    applications: tuple[Application, ...] = ()
    domains: tuple[KnowledgeDomain, ...] = ()
    entities: tuple[BusinessEntity, ...] = ()
    integrations: tuple[Integration, ...] = ()

    def counts(self) -> dict[str, int]:
        return {
            "stages": len(self.stages),
            "actions": len(self.actions),
            "teams": len(self.teams),
            "roles": len(self.roles),
            "persons": len(self.persons),
            "applications": len(self.applications),
            "domains": len(self.domains),
            "entities": len(self.entities),
            "integrations": len(self.integrations),
        }
