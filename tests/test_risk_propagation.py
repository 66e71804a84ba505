from __future__ import annotations

import itertools

import pytest

from archlens.core import (
    RISK_LEVELS,
    RISK_MATRIX,
    calculate_action_risk,
    calculate_all_risks,
    calculate_application_risk,
    calculate_integration_risk,
    calculate_stage_risk,
    count_by_level,
    higher_risk,
    risk_of,
)
from archlens.core.risk import sort_by_risk
from archlens.models import Action, Application, Integration, ValueChainStage


def _integration(integration_id: str, source: str, target: str, maturity: str = "", reliability: str = "") -> Integration:
    return Integration(
        id=integration_id,
        source_application_id=source,
        target_application_id=target,
        maturity=maturity,
        reliability=reliability,
    )


@pytest.mark.parametrize(
    ("maturity", "reliability", "expected"),
    [
        ("automated", "high", "none"),
        ("automated", "medium", "low"),
        ("automated", "low", "medium"),
        ("semi-automated", "high", "low"),
        ("semi-automated", "medium", "medium"),
        ("semi-automated", "low", "high"),
        ("manual-with-template", "high", "medium"),
        ("manual-with-template", "medium", "high"),
        ("manual-with-template", "low", "high"),
        ("manual-adhoc", "high", "high"),
        ("manual-adhoc", "medium", "critical"),
        ("manual-adhoc", "low", "critical"),
    ],
)
def test_integration_risk_matrix(maturity: str, reliability: str, expected: str) -> None:
    integration = _integration("I1", "A", "B", maturity, reliability)
    assert calculate_integration_risk(integration) == expected


def test_integration_risk_degrades_to_none() -> None:
    assert calculate_integration_risk(_integration("I1", "A", "B", reliability="low")) == "none"
    assert calculate_integration_risk(_integration("I1", "A", "B", maturity="automated")) == "none"
    assert calculate_integration_risk(_integration("I1", "A", "B", "automated", "sometimes")) == "none"
    assert calculate_integration_risk(_integration("I1", "A", "B", "telepathy", "high")) == "none"
    assert calculate_integration_risk(None) == "none"
    assert calculate_integration_risk(object()) == "none"


def test_matrix_outputs_are_known_levels() -> None:
    for row in RISK_MATRIX.values():
        assert set(row.values()) <= set(RISK_LEVELS)


def test_higher_risk_is_commutative_and_picks_the_more_severe() -> None:
    for a, b in itertools.product(RISK_LEVELS, repeat=2):
        result = higher_risk(a, b)
        assert result == higher_risk(b, a)
        assert result == (a if RISK_LEVELS.index(a) >= RISK_LEVELS.index(b) else b)


def test_higher_risk_treats_unknown_as_none() -> None:
    assert higher_risk(None, "low") == "low"
    assert higher_risk("bogus", None) == "none"
    assert higher_risk(42, "critical") == "critical"


def test_application_risk_takes_worst_of_source_and_target() -> None:
    integrations = [
        _integration("I1", "X", "A1", "manual-adhoc", "medium"),
        _integration("I2", "A1", "Y", "automated", "high"),
        _integration("I3", "X", "Y", "manual-adhoc", "low"),
    ]
    assert calculate_integration_risk(integrations[0]) == "critical"
    assert calculate_integration_risk(integrations[1]) == "none"
    assert calculate_application_risk("A1", integrations) == "critical"
    assert calculate_application_risk("unconnected", integrations) == "none"
    assert calculate_application_risk("A1", None) == "none"


def test_action_risk_reads_precomputed_app_risks() -> None:
    action = Action(id="act", application_ids=("A1", "A2", "missing"))
    assert calculate_action_risk(action, {"A1": "low", "A2": "high"}) == "high"
    assert calculate_action_risk(Action(id="empty"), {"A1": "critical"}) == "none"
    assert calculate_action_risk(action, None) == "none"


def test_stage_risk_only_counts_actions_of_the_stage() -> None:
    actions = [
        Action(id="a1", value_chain_stage_id="S1"),
        Action(id="a2", value_chain_stage_id="S1"),
        Action(id="a3", value_chain_stage_id="S2"),
    ]
    risks = {"a1": "low", "a2": "medium", "a3": "critical"}
    assert calculate_stage_risk("S1", actions, risks) == "medium"
    assert calculate_stage_risk("S2", actions, risks) == "critical"
    assert calculate_stage_risk("S3", actions, risks) == "none"


def test_end_to_end_cascade() -> None:
    stages = [ValueChainStage(id="S1", name="Stage", order=0)]
    actions = [Action(id="A1", value_chain_stage_id="S1", application_ids=("App1",))]
    applications = [Application(id="App1", name="App 1")]
    integrations = [_integration("I1", "App1", "App2", "semi-automated", "low")]

    report = calculate_all_risks(integrations, applications, actions, stages)

    assert report.integration_risks == {"I1": "high"}
    assert report.app_risks == {"App1": "high"}
    assert report.action_risks == {"A1": "high"}
    assert report.stage_risks == {"S1": "high"}


def test_all_risks_cover_every_id_and_default_to_none() -> None:
    report = calculate_all_risks(
        [],
        [Application(id="lonely")],
        [Action(id="idle", value_chain_stage_id="S1")],
        [ValueChainStage(id="S1"), ValueChainStage(id="S2")],
    )
    assert report.app_risks == {"lonely": "none"}
    assert report.action_risks == {"idle": "none"}
    assert report.stage_risks == {"S1": "none", "S2": "none"}


def test_all_risks_is_idempotent_and_order_independent() -> None:
    integrations = [
        _integration("I1", "A", "B", "manual-with-template", "medium"),
        _integration("I2", "B", "C", "automated", "low"),
    ]
    applications = [Application(id=app_id) for app_id in ("A", "B", "C")]
    actions = [
        Action(id="x", value_chain_stage_id="S", application_ids=("A", "C")),
        Action(id="y", value_chain_stage_id="S", application_ids=("C",)),
    ]
    stages = [ValueChainStage(id="S")]

    first = calculate_all_risks(integrations, applications, actions, stages)
    second = calculate_all_risks(integrations, applications, actions, stages)
    reversed_input = calculate_all_risks(
        list(reversed(integrations)), list(reversed(applications)), list(reversed(actions)), stages
    )

    assert first == second
    assert first.to_payload() == reversed_input.to_payload()
    assert first.app_risks == {"A": "high", "B": "high", "C": "medium"}
    assert first.stage_risks == {"S": "high"}


def test_payload_uses_camel_case_tiers() -> None:
    payload = calculate_all_risks([], [], [], []).to_payload()
    assert set(payload) == {"integrationRisks", "appRisks", "actionRisks", "stageRisks"}


def test_risk_of_defaults_missing_keys_to_none() -> None:
    assert risk_of({"a": "high"}, "a") == "high"
    assert risk_of({"a": "high"}, "b") == "none"
    assert risk_of({"a": "weird"}, "a") == "none"
    assert risk_of(None, "a") == "none"


def test_count_and_sort_by_risk() -> None:
    risks = {"i1": "low", "i2": "critical", "i3": "low", "i4": "none"}
    assert count_by_level(risks) == {"none": 1, "low": 2, "medium": 0, "high": 0, "critical": 1}

    items = [_integration(item_id, "A", "B") for item_id in ("i1", "i2", "i3", "i4", "i5")]
    assert [item.id for item in sort_by_risk(items, risks)] == ["i2", "i1", "i3", "i4", "i5"]


def test_raw_mappings_cascade_like_model_objects() -> None:
    stages = [{"id": "S1", "name": "Stage", "order": 0}]
    actions = [{"id": "A1", "valueChainStageId": "S1", "applicationIds": ["App1"]}]
    applications = [{"id": "App1", "name": "App 1"}]
    integrations = [
        {
            "id": "I1",
            "sourceApplicationId": "App1",
            "targetApplicationId": "App2",
            "maturity": "semi-automated",
            "reliability": "low",
        }
    ]

    assert calculate_integration_risk({"maturity": "manual-adhoc", "reliability": "medium"}) == "critical"
    report = calculate_all_risks(integrations, applications, actions, stages)

    assert report.to_payload() == {
        "integrationRisks": {"I1": "high"},
        "appRisks": {"App1": "high"},
        "actionRisks": {"A1": "high"},
        "stageRisks": {"S1": "high"},
    }


def test_malformed_ids_are_skipped_without_raising() -> None:
    action = Action(id="a", application_ids=(["x"],))  # type: ignore[arg-type]
    assert calculate_action_risk(action, {"x": "high"}) == "none"

    bad_action = {"id": ["a"], "valueChainStageId": "S1", "applicationIds": ["x"]}
    assert calculate_stage_risk("S1", [bad_action], {"a": "critical"}) == "none"
    assert calculate_action_risk({"applicationIds": 7}, {"x": "high"}) == "none"
    assert risk_of({"a": "high"}, ["a"]) == "none"

    report = calculate_all_risks(
        [{"id": {"nested": 1}, "maturity": "manual-adhoc", "reliability": "low"}],
        [{"id": ["x"]}, {"id": "x"}],
        [bad_action, {"id": "A2", "valueChainStageId": "S1", "applicationIds": ["x"]}],
        [{"id": "S1"}, {"id": None}],
    )
    assert report.integration_risks == {}
    assert report.app_risks == {"x": "none"}
    assert report.action_risks == {"A2": "none"}
    assert report.stage_risks == {"S1": "none"}
    assert sort_by_risk([{"id": ["x"]}, Action(id="A2")], {"A2": "low"})[0] == Action(id="A2")
