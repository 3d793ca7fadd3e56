# backend/routers/__init__.py

from .upload import router as upload_router
from .datasets import router as datasets_router
from .plot import router as plot_router
from .stats import router as stats_router
