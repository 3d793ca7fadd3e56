# backend/routers/deps.py

from fastapi import Request

from config import Settings
from utils.data_store import DatasetStore


def get_store(request: Request) -> DatasetStore:
    return request.app.state.store


def get_settings(request: Request) -> Settings:
    return request.app.state.settings
