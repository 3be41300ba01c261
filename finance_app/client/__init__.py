"""Client package: API client, record snapshot and view builders for dashboard front ends."""

from .api_client import FinanceApiClient  # noqa: F401
from .snapshot import LoadState, RecordSnapshot, SnapshotStore, ViewState  # noqa: F401
from .views import build_analytics, build_budget_view, build_dashboard  # noqa: F401
