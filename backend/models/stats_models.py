# backend/models/stats_models.py

from pydantic import BaseModel
from typing import Optional


class AxisSummary(BaseModel):
    min: float
    max: float
    mean: Optional[float] = None
    std: Optional[float] = None


class DatasetStats(BaseModel):
    file_name: str
    count: int
    x: Optional[AxisSummary] = None
    y: Optional[AxisSummary] = None
    correlation: Optional[float] = None
