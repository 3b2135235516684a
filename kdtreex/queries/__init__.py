from .knn import NeighborSearch, query, search_nearest
from .result_set import ResultSet

__all__ = [
    "NeighborSearch",
    "ResultSet",
    "query",
    "search_nearest",
]
