from __future__ import annotations

from fastapi import APIRouter, Depends, Query
from fastapi.responses import JSONResponse

from app.dependencies import get_snapshot
from app.services.architecture_views import (
    DETAIL_BUILDERS,
    build_blueprint_viewmodel,
    build_detail_viewmodel,
    build_domains_viewmodel,
    build_integration_map_viewmodel,
    build_landscape_viewmodel,
    build_risk_summary,
)
from archlens.core import ModelSnapshot

router = APIRouter(prefix="/api", tags=["architecture"])


@router.get("/risks")
def api_risks(snapshot: ModelSnapshot = Depends(get_snapshot)):
    return build_risk_summary(snapshot)


@router.get("/blueprint")
def api_blueprint(snapshot: ModelSnapshot = Depends(get_snapshot)):
    return build_blueprint_viewmodel(snapshot)


@router.get("/applications")
def api_applications(
    group_by: str = Query(default="category"),
    q: str = Query(default=""),
    snapshot: ModelSnapshot = Depends(get_snapshot),
):
    return build_landscape_viewmodel(snapshot, group_by=group_by, q=q)


@router.get("/integrations")
def api_integrations(
    risk: list[str] = Query(default=[]),
    app: str = Query(default=""),
    snapshot: ModelSnapshot = Depends(get_snapshot),
):
    return build_integration_map_viewmodel(snapshot, risk_levels=risk, app_id=app)


@router.get("/domains")
def api_domains(snapshot: ModelSnapshot = Depends(get_snapshot)):
    return build_domains_viewmodel(snapshot)


@router.get("/{kind}/{item_id}")
def api_detail(kind: str, item_id: str, snapshot: ModelSnapshot = Depends(get_snapshot)):
    if kind not in DETAIL_BUILDERS:
        return JSONResponse(status_code=404, content={"error": "not_found"})
    detail = build_detail_viewmodel(snapshot, kind, item_id)
    if detail is None:
        return JSONResponse(status_code=404, content={"error": "not_found"})
    return detail
