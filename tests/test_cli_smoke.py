from __future__ import annotations

import json
from pathlib import Path

from archlens.cli.main import main


def test_archlens_risk_cli_smoke(sample_model_dir: Path, tmp_path: Path, capsys) -> None:
    output_path = tmp_path / "risks.json"

    code = main([str(sample_model_dir), "--out", str(output_path)])

    assert code == 0
    result = json.loads(output_path.read_text(encoding="utf-8"))
    assert set(result["risks"]) == {"integrations", "applications", "actions", "stages"}
    assert result["risks"]["stages"]["vc-delivery"] == "critical"
    assert result["summary"]["stages"] == {"none": 0, "low": 0, "medium": 2, "high": 0, "critical": 2}
    out = capsys.readouterr().out
    assert "stages: none=0 low=0 medium=2 high=0 critical=2" in out
    assert f"wrote={output_path.resolve()}" in out


def test_cli_tier_and_min_level_filters(sample_model_dir: Path, tmp_path: Path) -> None:
    output_path = tmp_path / "apps.json"

    code = main([str(sample_model_dir), "--out", str(output_path), "--tier", "applications", "--min-level", "high"])

    assert code == 0
    result = json.loads(output_path.read_text(encoding="utf-8"))
    assert result["risks"] == {"applications": {"app-erp": "critical", "app-sheets": "critical"}}
    assert result["summary"]["applications"]["medium"] == 3


def test_cli_reports_missing_input(tmp_path: Path, capsys) -> None:
    code = main([str(tmp_path / "missing"), "--out", str(tmp_path / "out.json")])

    assert code == 2
    assert "error: input not found" in capsys.readouterr().err


def test_cli_reports_invalid_input(tmp_path: Path, capsys) -> None:
    bad = tmp_path / "bad.json"
    bad.write_text("[]", encoding="utf-8")

    code = main([str(bad), "--out", str(tmp_path / "out.json")])

    assert code == 2
    assert "error: invalid input" in capsys.readouterr().err
