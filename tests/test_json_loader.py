from __future__ import annotations

import json
import logging
from pathlib import Path

import pytest

from archlens.core import build_snapshot
from archlens.io import load_dataset
from archlens.models import RoleRef, TeamRef


def test_load_sample_directory(sample_model_dir: Path) -> None:
    dataset = load_dataset(sample_model_dir)

    assert dataset.counts() == {
        "stages": 4,
        "actions": 8,
        "teams": 3,
        "roles": 3,
        "persons": 2,
        "applications": 6,
        "domains": 3,
        "entities": 4,
        "integrations": 6,
    }
    signup = next(action for action in dataset.actions if action.id == "act-signup")
    assert signup.application_ids == ("app-crm", "app-mail")
    assert signup.raci is not None
    assert signup.raci.responsible == RoleRef(id="role-account-manager")
    assert signup.raci.informed == (TeamRef(id="team-ops"),)

    customer = next(entity for entity in dataset.entities if entity.id == "be-customer")
    assert customer.attributes[0].validation_rules == "RFC 5322 address"
    assert customer.attributes[0].retention_policy is None


def test_sample_model_risks(sample_model_dir: Path) -> None:
    snapshot = build_snapshot(load_dataset(sample_model_dir))
    risks = snapshot.risks

    assert risks.integration_risks["int-sheets-erp"] == "critical"
    assert risks.integration_risks["int-legacy-export"] == "none"
    assert risks.app_risks == {
        "app-crm": "medium",
        "app-mail": "none",
        "app-wiki": "medium",
        "app-erp": "critical",
        "app-sheets": "critical",
        "app-newsletter": "medium",
    }
    assert risks.action_risks["act-enquiry"] == "none"
    assert risks.action_risks["act-service-plan"] == "critical"
    assert risks.stage_risks == {
        "vc-awareness": "medium",
        "vc-billing": "critical",
        "vc-onboarding": "medium",
        "vc-delivery": "critical",
    }
    assert [stage.id for stage in snapshot.sorted_stages] == [
        "vc-awareness",
        "vc-onboarding",
        "vc-delivery",
        "vc-billing",
    ]


def test_load_bundle_file(tmp_path: Path) -> None:
    bundle = {
        "valueChainStages": [{"id": "S1", "name": "Stage", "order": 0}],
        "actions": [{"id": "A1", "valueChainStageId": "S1", "applicationIds": ["App1"]}],
        "applications": [{"id": "App1", "name": "App"}],
        "integrations": [
            {
                "id": "I1",
                "sourceApplicationId": "App1",
                "targetApplicationId": "App2",
                "maturity": "semi-automated",
                "reliability": "low",
            }
        ],
    }
    path = tmp_path / "model.json"
    path.write_text(json.dumps(bundle), encoding="utf-8")

    snapshot = build_snapshot(load_dataset(path))

    assert snapshot.dataset.teams == ()
    assert snapshot.risks.stage_risks == {"S1": "high"}


def test_missing_collections_are_logged(tmp_path: Path, caplog: pytest.LogCaptureFixture) -> None:
    (tmp_path / "applications.json").write_text("[]", encoding="utf-8")

    with caplog.at_level(logging.WARNING, logger="archlens.io.json_loader"):
        dataset = load_dataset(tmp_path)

    assert dataset.applications == ()
    assert "valueChainStages" in caplog.text


def test_invalid_structure_raises(tmp_path: Path) -> None:
    path = tmp_path / "model.json"

    path.write_text(json.dumps([1, 2, 3]), encoding="utf-8")
    with pytest.raises(ValueError):
        load_dataset(path)

    path.write_text(json.dumps({"actions": {"id": "A1"}}), encoding="utf-8")
    with pytest.raises(ValueError):
        load_dataset(path)

    path.write_text(json.dumps({"actions": ["A1"]}), encoding="utf-8")
    with pytest.raises(ValueError):
        load_dataset(path)


def test_lenient_field_conversion(tmp_path: Path) -> None:
    path = tmp_path / "model.json"
    path.write_text(
        json.dumps(
            {
                "valueChainStages": [{"id": "S1", "order": "not-a-number"}],
                "actions": [{"id": "A1", "raci": "nope", "applicationIds": None}],
            }
        ),
        encoding="utf-8",
    )

    dataset = load_dataset(path)

    assert dataset.stages[0].order == 0
    assert dataset.actions[0].raci is None
    assert dataset.actions[0].application_ids == ()
