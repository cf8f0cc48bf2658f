from .distance import DistanceFn, haversine_distance

__all__ = ['DistanceFn', 'haversine_distance']
