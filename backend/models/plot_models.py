# backend/models/plot_models.py

from pydantic import BaseModel
from typing import List


class DataPoint(BaseModel):
    x: float
    y: float


class ScatterPlot(BaseModel):
    title: str
    xlabel: str
    ylabel: str
    data_points: List[DataPoint]
