"""Saved chart and space summaries."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Space:
    """A space (folder) that saved charts live in."""
    uuid: str
    name: str
    organization_uuid: str
    project_uuid: str
    is_private: bool = False


@dataclass(frozen=True, slots=True)
class ChartSummary:
    """A saved chart built on an explore."""
    uuid: str
    name: str
    space_uuid: str
    space_name: str
    explore_name: str
    description: str | None = None
    dashboard_uuid: str | None = None
    dashboard_name: str | None = None
    chart_kind: str | None = None
