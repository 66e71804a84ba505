from .index import (
    NOT_AVAILABLE,
    ResolvedRaci,
    build_index,
    build_role_index,
    read_field,
    resolve_raci,
    resolve_raci_ref,
)
from .risk import (
    RISK_LEVELS,
    RISK_MATRIX,
    RiskLevel,
    RiskReport,
    calculate_action_risk,
    calculate_all_risks,
    calculate_application_risk,
    calculate_integration_risk,
    calculate_stage_risk,
    count_by_level,
    higher_risk,
    risk_of,
)
from .snapshot import ModelSnapshot, build_snapshot

__all__ = [
    "NOT_AVAILABLE",
    "RISK_LEVELS",
    "RISK_MATRIX",
    "ModelSnapshot",
    "ResolvedRaci",
    "RiskLevel",
    "RiskReport",
    "build_index",
    "build_role_index",
    "build_snapshot",
    "calculate_action_risk",
    "calculate_all_risks",
    "calculate_application_risk",
    "calculate_integration_risk",
    "calculate_stage_risk",
    "count_by_level",
    "higher_risk",
    "read_field",
    "resolve_raci",
    "resolve_raci_ref",
    "risk_of",
]
