from .entity_mapper import ClusterEntityMapper

__all__ = [
    "ClusterEntityMapper",
]
