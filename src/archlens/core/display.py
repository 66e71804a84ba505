from __future__ import annotations

from types import MappingProxyType
from typing import Any, Mapping

LANES: tuple[dict[str, str], ...] = (
    {"id": "customer", "label": "Customer"},
    {"id": "frontstage", "label": "Frontstage"},
    {"id": "backstage", "label": "Backstage"},
    {"id": "support", "label": "Support"},
)

LANE_DIVIDERS: tuple[dict[str, str], ...] = (
    {"after_lane": "customer", "label": "Line of Interaction", "class_name": "interaction-line"},
    {"after_lane": "frontstage", "label": "Line of Visibility", "class_name": "visibility-line"},
)

CATEGORY_ORDER: tuple[str, ...] = (
    "CRM",
    "Operations",
    "Communication",
    "Documentation",
    "Finance",
    "Analytics",
    "Marketing",
    "HR",
)

TIMEK_ORDER: tuple[str, ...] = ("invest", "keep", "tolerate", "migrate", "eliminate")

_RISK_CLASSES = MappingProxyType(
    {"none": "", "low": "risk-low", "medium": "risk-medium", "high": "risk-high", "critical": "risk-critical"}
)

_RISK_COLORS = MappingProxyType(
    {"none": "transparent", "low": "#eab308", "medium": "#f97316", "high": "#ef4444", "critical": "#991b1b"}
)

_RISK_LABELS = MappingProxyType(
    {"none": "—", "low": "Low", "medium": "Medium", "high": "High", "critical": "Critical"}
)

_TIMEK_INFO: Mapping[str, Mapping[str, str]] = MappingProxyType(
    {
        "invest": MappingProxyType({"label": "Invest", "color": "#16a34a", "bg": "#f0fdf4"}),
        "keep": MappingProxyType({"label": "Keep", "color": "#2563eb", "bg": "#eff6ff"}),
        "tolerate": MappingProxyType({"label": "Tolerate", "color": "#ca8a04", "bg": "#fefce8"}),
        "migrate": MappingProxyType({"label": "Migrate", "color": "#ea580c", "bg": "#fff7ed"}),
        "eliminate": MappingProxyType({"label": "Eliminate", "color": "#dc2626", "bg": "#fef2f2"}),
    }
)

_LANE_INFO: Mapping[str, Mapping[str, str]] = MappingProxyType(
    {
        "customer": MappingProxyType(
            {"label": "Customer", "color": "var(--lane-customer-border)", "bg": "var(--lane-customer)"}
        ),
        "frontstage": MappingProxyType(
            {"label": "Frontstage", "color": "var(--lane-frontstage-border)", "bg": "var(--lane-frontstage)"}
        ),
        "backstage": MappingProxyType(
            {"label": "Backstage", "color": "var(--lane-backstage-border)", "bg": "var(--lane-backstage)"}
        ),
        "support": MappingProxyType(
            {"label": "Support", "color": "var(--lane-support-border)", "bg": "var(--lane-support)"}
        ),
    }
)

_MATURITY_INFO: Mapping[str, Mapping[str, str]] = MappingProxyType(
    {
        "automated": MappingProxyType({"label": "Automated", "color": "#16a34a"}),
        "semi-automated": MappingProxyType({"label": "Semi-automated", "color": "#ca8a04"}),
        "manual-with-template": MappingProxyType({"label": "Manual (template)", "color": "#ea580c"}),
        "manual-adhoc": MappingProxyType({"label": "Manual (ad-hoc)", "color": "#dc2626"}),
    }
)

_FREQUENCY_LABELS = MappingProxyType(
    {
        "real-time": "Real-time",
        "event-triggered": "Event-triggered",
        "daily": "Daily",
        "weekly": "Weekly",
        "monthly": "Monthly",
        "on-demand": "On-demand",
    }
)

_CATEGORY_INFO: Mapping[str, Mapping[str, str]] = MappingProxyType(
    {
        "CRM": MappingProxyType({"color": "var(--cat-crm)", "bg": "#fdf2f8"}),
        "Communication": MappingProxyType({"color": "var(--cat-communication)", "bg": "#f5f3ff"}),
        "Documentation": MappingProxyType({"color": "var(--cat-documentation)", "bg": "#ecfeff"}),
        "Marketing": MappingProxyType({"color": "var(--cat-marketing)", "bg": "#fff7ed"}),
        "Finance": MappingProxyType({"color": "var(--cat-finance)", "bg": "#f0fdf4"}),
        "Operations": MappingProxyType({"color": "#0891b2", "bg": "#ecfeff"}),
        "Analytics": MappingProxyType({"color": "#7c3aed", "bg": "#f5f3ff"}),
        "HR": MappingProxyType({"color": "#be185d", "bg": "#fdf2f8"}),
    }
)

_OPERATION_LABELS = MappingProxyType(
    {"create": "Creates", "read": "Reads", "update": "Updates", "archive": "Archives"}
)


def _key(value: Any) -> str:
    return "" if value is None else str(value)


def risk_class(level: Any) -> str:
    return _RISK_CLASSES.get(_key(level), "")


def risk_color(level: Any) -> str:
    return _RISK_COLORS.get(_key(level), "transparent")


def risk_label(level: Any) -> str:
    return _RISK_LABELS.get(_key(level), "—")


def timek_info(classification: Any) -> dict[str, str]:
    info = _TIMEK_INFO.get(_key(classification))
    if info is None:
        return {"label": _key(classification), "color": "#6b7280", "bg": "#f9fafb"}
    return dict(info)


def lane_info(lane: Any) -> dict[str, str]:
    info = _LANE_INFO.get(_key(lane))
    if info is None:
        return {"label": _key(lane), "color": "#94a3b8", "bg": "#f1f5f9"}
    return dict(info)


def maturity_info(maturity: Any) -> dict[str, str]:
    info = _MATURITY_INFO.get(_key(maturity))
    if info is None:
        return {"label": _key(maturity), "color": "#6b7280"}
    return dict(info)


def frequency_label(frequency: Any) -> str:
    return _FREQUENCY_LABELS.get(_key(frequency), _key(frequency))


def category_info(category: Any) -> dict[str, str]:
    info = _CATEGORY_INFO.get(_key(category))
    if info is None:
        return {"color": "#6b7280", "bg": "#f9fafb"}
    return dict(info)


def operation_label(operation: Any) -> str:
    return _OPERATION_LABELS.get(_key(operation), _key(operation))
