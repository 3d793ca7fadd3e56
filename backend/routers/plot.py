# backend/routers/plot.py

from fastapi import APIRouter, Depends

from models.plot_models import ScatterPlot
from routers.deps import get_store
from services.csv_parser import parse_points_async
from services.plot_assembler import assemble
from utils.data_store import DatasetStore

router = APIRouter(prefix="/plot", tags=["Plot"])


@router.get("/{file_name}", response_model=ScatterPlot)
async def scatter_plot(file_name: str, store: DatasetStore = Depends(get_store)):
    """
    Returns chart-ready points for one dataset.
    Any malformed row fails the whole request, no partial series.
    """
    points = await parse_points_async(store, file_name)
    return assemble(points)
