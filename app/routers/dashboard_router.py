# /app/routers/dashboard_router.py

# --- Core FastAPI Imports ---
from fastapi import APIRouter, Depends

# --- Service and Model Imports ---
# Import the business logic service that this router will use.
from ..services import dashboard_service
from ..services.dashboard_service import DashboardState, get_dashboard_state
# Import the record service dependency provider.
from ..services.record_service import RecordService, get_record_service
# Import the Pydantic models to define the response shapes (the API contract).
from ..models.dashboard_model import DashboardCharts, DashboardStatus

# --- APIRouter Instance ---
router = APIRouter()

# --- Endpoint Definitions ---
@router.get(
    "/summary",
    response_model=DashboardStatus,
    summary="Get Dashboard Summary",
    description="Returns the latest course statistics together with the loading and error state."
)
def get_dashboard_summary(state: DashboardState = Depends(get_dashboard_state)):
    """
    The "thin" router layer: the state already holds the result of the last
    aggregation run, so this only hands out its presentation view.
    """
    return state.snapshot()


@router.post(
    "/refresh",
    response_model=DashboardStatus,
    summary="Refresh Dashboard Summary",
    description="Re-reads all five record collections and recomputes the statistics."
)
async def refresh_dashboard_summary(
    state: DashboardState = Depends(get_dashboard_state),
    records: RecordService = Depends(get_record_service)
):
    # A failed run is reported through the `error` field, never as a 5xx.
    return await state.refresh(records)


@router.get(
    "/charts",
    response_model=DashboardCharts,
    summary="Get Dashboard Chart Data",
    description="Returns the bar chart series (records per collection) and the payment status pie."
)
def get_dashboard_charts(state: DashboardState = Depends(get_dashboard_state)):
    return dashboard_service.build_charts(state.snapshot().summary)
