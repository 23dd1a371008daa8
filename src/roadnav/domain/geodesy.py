# roadnav/domain/geodesy.py
import math

EARTH_RADIUS_MI = 3963


def haversine_mi(lon1: float, lat1: float, lon2: float, lat2: float) -> float:
    """Great-circle distance in miles (haversine, R = 3963)."""
    phi1 = math.radians(lat1)
    phi2 = math.radians(lat2)
    dphi = math.radians(lat2 - lat1)
    dlambda = math.radians(lon2 - lon1)

    a = math.sin(dphi / 2.0) * math.sin(dphi / 2.0)
    a += math.cos(phi1) * math.cos(phi2) * math.sin(dlambda / 2.0) * math.sin(dlambda / 2.0)
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
    return EARTH_RADIUS_MI * c


def initial_bearing_deg(lon1: float, lat1: float, lon2: float, lat2: float) -> float:
    """Initial great-circle bearing in degrees, in (-180, 180]."""
    phi1 = math.radians(lat1)
    phi2 = math.radians(lat2)
    lambda1 = math.radians(lon1)
    lambda2 = math.radians(lon2)

    y = math.sin(lambda2 - lambda1) * math.cos(phi2)
    x = math.cos(phi1) * math.sin(phi2)
    x -= math.sin(phi1) * math.cos(phi2) * math.cos(lambda2 - lambda1)
    deg = math.degrees(math.atan2(y, x))
    return deg + 360.0 if deg <= -180.0 else deg


def relative_bearing_deg(current: float, previous: float) -> float:
    rel = current - previous
    if rel > 180.0:
        rel -= 360.0
    elif rel <= -180.0:
        rel += 360.0
    return rel


def meridian_distance_mi(lon: float, lat: float, meridian_lon: float) -> float:
    """
    Distance from (lon, lat) to the half-meridian at `meridian_lon`
    (the pole-to-pole arc, not the full great circle).
    """
    dlon = (lon - meridian_lon + 180.0) % 360.0 - 180.0
    if abs(dlon) >= 90.0:
        # closest point of the arc is the nearer pole
        return EARTH_RADIUS_MI * (math.pi / 2.0 - abs(math.radians(lat)))
    s = abs(math.sin(math.radians(dlon))) * math.cos(math.radians(lat))
    return EARTH_RADIUS_MI * math.asin(min(1.0, s))


def parallel_distance_mi(lat: float, parallel_lat: float) -> float:
    """Distance from any point at `lat` to the circle of latitude `parallel_lat`."""
    return EARTH_RADIUS_MI * abs(math.radians(lat - parallel_lat))
