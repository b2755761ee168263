"""Payload builders shared by the tests"""

from app.config import settings
from app.identity import encode_identity

API = settings.API_PREFIX


def widget_item(widget_type="widget1", x=0, y=0, w=2, h=2, min_h=1, max_h=4, **extra):
    item = {"i": widget_type, "w": w, "h": h, "minH": min_h, "maxH": max_h, "x": x, "y": y, "static": False}
    item.update(extra)
    return item


def layout(*items):
    """Same items at every breakpoint"""
    items = list(items)
    return {"sm": list(items), "md": list(items), "lg": list(items), "xl": list(items)}


LANDING_CONFIG = {
    "sm": [
        {"w": 1, "h": 4, "maxH": 10, "minH": 1, "cx": 0, "cy": 0, "i": "rhel#rhel"},
        {"w": 1, "h": 5, "maxH": 10, "minH": 1, "cx": 0, "cy": 1, "i": "recentlyVisited#recentlyVisited"},
    ],
    "md": [
        {"w": 1, "h": 4, "maxH": 10, "minH": 1, "cx": 0, "cy": 0, "i": "rhel#rhel"},
        {"w": 1, "h": 3, "maxH": 10, "minH": 1, "cx": 1, "cy": 0, "i": "recentlyVisited#recentlyVisited"},
    ],
    "lg": [
        {"w": 1, "h": 4, "maxH": 10, "minH": 1, "cx": 0, "cy": 0, "i": "rhel#rhel"},
        {"w": 2, "h": 6, "maxH": 10, "minH": 1, "cx": 0, "cy": 4, "i": "exploreCapabilities#exploreCapabilities"},
    ],
    "xl": [
        {"w": 3, "h": 6, "maxH": 10, "minH": 1, "cx": 0, "cy": 2, "i": "exploreCapabilities#exploreCapabilities"},
    ],
}

HOME_CONFIG = layout(widget_item("home-widget", x=0, y=0), widget_item("news", x=2, y=0))


def auth_headers(user_id):
    return {"x-rh-identity": encode_identity(user_id)}
