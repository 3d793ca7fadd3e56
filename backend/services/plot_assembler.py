# backend/services/plot_assembler.py

from typing import List

from models.plot_models import DataPoint, ScatterPlot

PLOT_TITLE = "Scatter Plot"
X_LABEL = "X"
Y_LABEL = "Y"


def assemble(points: List[DataPoint]) -> ScatterPlot:
    return ScatterPlot(
        title=PLOT_TITLE,
        xlabel=X_LABEL,
        ylabel=Y_LABEL,
        data_points=list(points),
    )
