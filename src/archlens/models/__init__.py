from .architecture import (
    Action,
    Application,
    BusinessEntity,
    EntityAttribute,
    EntityInteraction,
    GovernanceRole,
    Integration,
    KnowledgeDomain,
    Person,
    Raci,
    RaciRef,
    ResolvedRole,
    RoleRef,
    Team,
    TeamRef,
    TeamRole,
    UnknownRef,
    ValueChainStage,
    to_action,
    to_application,
    to_business_entity,
    to_governance_role,
    to_integration,
    to_knowledge_domain,
    to_person,
    to_raci,
    to_raci_ref,
    to_stage,
    to_team,
)
from .dataset import ArchitectureDataset

__all__ = [
    "Action",
    "Application",
    "ArchitectureDataset",
    "BusinessEntity",
    "EntityAttribute",
    "EntityInteraction",
    "GovernanceRole",
    "Integration",
    "KnowledgeDomain",
    "Person",
    "Raci",
    "RaciRef",
    "ResolvedRole",
    "RoleRef",
    "Team",
    "TeamRef",
    "TeamRole",
    "UnknownRef",
    "ValueChainStage",
    "to_action",
    "to_application",
    "to_business_entity",
    "to_governance_role",
    "to_integration",
    "to_knowledge_domain",
    "to_person",
    "to_raci",
    "to_raci_ref",
    "to_stage",
    "to_team",
]
