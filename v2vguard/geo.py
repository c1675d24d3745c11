"""Geodesic helpers: distances, headings and relative positions of vehicles."""

import math

EARTH_RADIUS_KM = 6371.0

SAME_DIRECTION_CONE = 30.0
AHEAD_ARC_LOW = 45.0
AHEAD_ARC_HIGH = 315.0
OPPOSITE_CONE_LOW = 150.0
OPPOSITE_CONE_HIGH = 210.0
BEHIND_ARC_LOW = 135.0
BEHIND_ARC_HIGH = 225.0


def to_radians(degree):
    """Convert degrees to radians."""
    return (math.pi / 180) * degree


def degrees_to_radians(degrees):
    """Convert degrees to radians."""
    return degrees * math.pi / 180.0


def radians_to_degrees(radians):
    """Convert radians to degrees."""
    return radians * 180.0 / math.pi


def distance(lat1, long1, lat2, long2):
    """Great-circle distance in metres between two points (haversine)."""
    lat1 = to_radians(lat1)
    long1 = to_radians(long1)
    lat2 = to_radians(lat2)
    long2 = to_radians(long2)

    dlong = long2 - long1
    dlat = lat2 - lat1

    ans = math.sin(dlat / 2) ** 2 + math.cos(lat1) * math.cos(lat2) * math.sin(dlong / 2) ** 2
    ans = 2 * math.asin(math.sqrt(ans))
    return ans * EARTH_RADIUS_KM * 1000


def _initial_bearing(lat1, lon1, lat2, lon2):
    d_lon = lon2 - lon1
    y = math.sin(d_lon) * math.cos(lat2)
    x = math.cos(lat1) * math.sin(lat2) - math.sin(lat1) * math.cos(lat2) * math.cos(d_lon)
    return math.fmod(radians_to_degrees(math.atan2(y, x)) + 360.0, 360.0)


def calculate_heading(lat1, lon1, lat2, lon2):
    """Heading in degrees [0, 360) of travel from point 1 to point 2."""
    factor = math.pi / 180.0
    return _initial_bearing(lat1 * factor, lon1 * factor, lat2 * factor, lon2 * factor)


def calculate_heading_difference(heading1, heading2):
    """Absolute difference between two headings, in degrees."""
    return abs(heading1 - heading2)


def calculate_bearing(lat1, lon1, lat2, lon2):
    """Bearing in degrees [0, 360) from point 1 to point 2."""
    return _initial_bearing(
        degrees_to_radians(lat1),
        degrees_to_radians(lon1),
        degrees_to_radians(lat2),
        degrees_to_radians(lon2),
    )


def is_ahead_and_same_direction(v1_lat1, v1_lon1, v1_lat2, v1_lon2, v2_lat1, v2_lon1, v2_lat2, v2_lon2):
    """Whether vehicle 2 travels the same way as vehicle 1 and lies ahead of it."""
    heading1 = calculate_heading(v1_lat1, v1_lon1, v1_lat2, v1_lon2)
    heading2 = calculate_heading(v2_lat1, v2_lon1, v2_lat2, v2_lon2)

    if calculate_heading_difference(heading1, heading2) <= SAME_DIRECTION_CONE:
        bearing_to_v2 = calculate_heading(v1_lat2, v1_lon2, v2_lat2, v2_lon2)
        bearing_diff = calculate_heading_difference(heading1, bearing_to_v2)
        if bearing_diff <= AHEAD_ARC_LOW or bearing_diff >= AHEAD_ARC_HIGH:
            return True
    return False


def is_ahead_and_opposite_direction(v1_lat1, v1_lon1, v1_lat2, v1_lon2, v2_lat1, v2_lon1, v2_lat2, v2_lon2):
    """Whether vehicle 2 travels opposite to vehicle 1 within the 135..225 degree bearing arc."""
    heading1 = calculate_heading(v1_lat1, v1_lon1, v1_lat2, v1_lon2)
    heading2 = calculate_heading(v2_lat1, v2_lon1, v2_lat2, v2_lon2)

    heading_diff = calculate_heading_difference(heading1, heading2)
    if OPPOSITE_CONE_LOW <= heading_diff <= OPPOSITE_CONE_HIGH:
        bearing_to_v2 = calculate_heading(v1_lat2, v1_lon2, v2_lat2, v2_lon2)
        bearing_diff = calculate_heading_difference(heading1, bearing_to_v2)
        if BEHIND_ARC_LOW <= bearing_diff <= BEHIND_ARC_HIGH:
            return True
    return False


def determine_relative_position(lat1, lon1, lat2, lon2, lat3, lon3):
    """True if point 3 lies to the right of the track from point 1 to point 2, else False."""
    heading = calculate_heading(lat1, lon1, lat2, lon2)
    bearing = calculate_bearing(lat2, lon2, lat3, lon3)
    relative_bearing = math.fmod(bearing - heading + 360.0, 360.0)
    return 0 < relative_bearing < 180