"""Shared test fixtures for the data catalog service.

The `workspace_data` fixture mirrors a small analytics project:
- `orders`: base table gated on region=eu, joined to `customers`
- `users`: unrestricted table with a PII-gated `ssn` field
- `payments`: an explore that failed to compile
"""

import asyncio

import pytest

from catalog_svc.identity.types import CallerIdentity
from catalog_svc.service import CatalogService
from catalog_svc.stores.workspace import Workspace, WorkspaceLoader


ORG = "acme"
PROJECT = "jaffle-shop"


# =============================================================================
# Workspace Fixtures
# =============================================================================

@pytest.fixture
def explore_data() -> list[dict]:
    """Explore definitions, in compile order."""
    return [
        {
            "name": "orders",
            "label": "Orders",
            "base_table": "orders",
            "group_label": "Sales",
            "yml_path": "models/orders.yml",
            "joined_tables": [
                {"table": "customers", "sql_on": "${orders.customer_id} = ${customers.customer_id}"},
            ],
            "tables": {
                "orders": {
                    "label": "Orders",
                    "description": "All orders",
                    "required_attributes": {"region": ["eu"]},
                    "dimensions": {
                        "order_id": {"type": "number"},
                        "status": {"type": "string", "description": "Fulfilment status"},
                    },
                    "metrics": {
                        "total_revenue": {"type": "sum"},
                    },
                },
                "customers": {
                    "label": "Customers",
                    "description": "Customer master data",
                    "dimensions": {
                        "customer_id": {"type": "number"},
                        "email": {"type": "string", "required_attributes": {"pii": [True]}},
                    },
                },
            },
        },
        {
            "name": "users",
            "label": "Users",
            "base_table": "users",
            "yml_path": "models/users.yml",
            "tables": {
                "users": {
                    "label": "Users",
                    "description": "Registered users",
                    "dimensions": {
                        "ssn": {"type": "string", "required_attributes": {"pii": [True]}},
                    },
                    "metrics": {
                        "revenue": {"type": "sum", "description": "Lifetime revenue"},
                    },
                },
            },
        },
        {
            "name": "payments",
            "label": "Payments",
            "base_table": "payments",
            "errors": ["missing column x"],
        },
    ]


@pytest.fixture
def workspace_data(explore_data) -> dict:
    return {
        "projects": [
            {
                "uuid": PROJECT,
                "organization_uuid": ORG,
                "name": "Jaffle Shop",
                "explores": explore_data,
                "spaces": [
                    {"uuid": "shared", "name": "Shared"},
                    {"uuid": "finance", "name": "Finance", "is_private": True,
                     "access": {"analyst-eu": "viewer"}},
                    {"uuid": "leadership", "name": "Leadership", "is_private": True},
                ],
                "charts": [
                    {"uuid": "c1", "name": "Weekly revenue", "space_uuid": "shared",
                     "explore_name": "orders", "chart_kind": "line"},
                    {"uuid": "c2", "name": "Board KPIs", "space_uuid": "leadership",
                     "explore_name": "orders", "chart_kind": "big_number"},
                    {"uuid": "c3", "name": "Refunds", "space_uuid": "finance",
                     "explore_name": "orders", "dashboard_uuid": "d1",
                     "dashboard_name": "Finance overview"},
                    {"uuid": "c4", "name": "Signups", "space_uuid": "shared",
                     "explore_name": "users"},
                ],
            },
            {
                # Registered but never compiled
                "uuid": "empty-project",
                "organization_uuid": ORG,
            },
        ],
        "user_attributes": {
            ORG: {
                "analyst-eu": {"region": ["eu"], "pii": [False]},
                "analyst-us": {"region": ["us"]},
                "dpo": {"region": ["eu", "us"], "pii": [True]},
            },
        },
    }


@pytest.fixture
def workspace(workspace_data) -> Workspace:
    """Workspace loaded from `workspace_data`."""
    return asyncio.run(WorkspaceLoader(Workspace()).load_dict(workspace_data))


@pytest.fixture
def service(workspace) -> CatalogService:
    return CatalogService.from_workspace(workspace)


# =============================================================================
# Caller Fixtures
# =============================================================================

@pytest.fixture
def analyst_eu() -> CallerIdentity:
    """Viewer holding region=eu and pii=false."""
    return CallerIdentity(user_uuid="analyst-eu", organization_uuid=ORG, org_role="viewer")


@pytest.fixture
def analyst_us() -> CallerIdentity:
    """Viewer holding region=us only."""
    return CallerIdentity(user_uuid="analyst-us", organization_uuid=ORG, org_role="viewer")


@pytest.fixture
def dpo() -> CallerIdentity:
    """Admin holding every attribute."""
    return CallerIdentity(user_uuid="dpo", organization_uuid=ORG, org_role="admin")


@pytest.fixture
def outsider() -> CallerIdentity:
    """Member of another organization."""
    return CallerIdentity(user_uuid="outsider", organization_uuid="globex", org_role="admin")


# =============================================================================
# Test Markers
# =============================================================================

def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line("markers", "integration: marks as integration test")
