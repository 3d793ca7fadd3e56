# backend/routers/stats.py

from fastapi import APIRouter, Depends

from models.stats_models import DatasetStats
from routers.deps import get_store
from services.csv_parser import parse_points_async
from services.stats_engine import compute_dataset_stats
from utils.data_store import DatasetStore

router = APIRouter(prefix="/stats", tags=["Stats"])


@router.get("/{file_name}", response_model=DatasetStats)
async def stats(file_name: str, store: DatasetStore = Depends(get_store)):
    """
    Simple aggregate stats over one dataset's points.
    """
    points = await parse_points_async(store, file_name)
    return compute_dataset_stats(file_name, points)
