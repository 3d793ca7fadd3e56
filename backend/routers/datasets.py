# backend/routers/datasets.py

from typing import List

from fastapi import APIRouter, Depends

from routers.deps import get_store
from services.catalog import list_datasets
from utils.data_store import DatasetStore

router = APIRouter(tags=["Datasets"])


@router.get("/list", response_model=List[str])
def list_files(store: DatasetStore = Depends(get_store)):
    """
    Names of the uploaded CSV files, in directory order.
    """
    return list_datasets(store)
