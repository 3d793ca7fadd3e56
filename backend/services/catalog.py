# backend/services/catalog.py

from typing import List

from utils.data_store import DatasetStore


def list_datasets(store: DatasetStore) -> List[str]:
    """
    Names of every stored dataset with a .csv suffix.
    Order is whatever the store enumerates; no sorting or paging.
    """
    return store.list()
