from math import radians, sin, cos, sqrt, atan2, isfinite

from travel_pricing.utils.errors import ComputationError

R = 6371  # earth radius, km


def haversine(lat1, lon1, lat2, lon2):
    """Great-circle distance in meters. Coordinates are not range-checked."""
    rlat1, rlat2 = radians(lat1), radians(lat2)
    # differences taken in radians so two finite inputs cannot overflow to inf
    dlat = rlat2 - rlat1
    dlon = radians(lon2) - radians(lon1)
    a = sin(dlat / 2)**2 + cos(rlat1) * cos(rlat2) * sin(dlon / 2)**2
    # float overshoot would make sqrt(1 - a) NaN
    a = min(1.0, max(0.0, a))
    c = 2 * atan2(sqrt(a), sqrt(1 - a))
    return R * c * 1000


def compute_cost(client_lat, client_lon, driver_lat, driver_lon, prix_base_per_km):
    distance = haversine(client_lat, client_lon, driver_lat, driver_lon)
    if not isfinite(distance):
        raise ComputationError(f"distance is not finite: {distance}")

    cost = distance * prix_base_per_km
    if not isfinite(cost):
        raise ComputationError(f"prix_travel is not finite: {cost}")
    return distance, cost
