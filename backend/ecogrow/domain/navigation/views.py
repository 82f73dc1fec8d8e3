"""View selection for the client shell."""
from enum import Enum
from typing import Optional


class View(str, Enum):
    """Named views of the client."""
    HOME = "home"
    DASHBOARD = "dashboard"
    SCAN = "scan"
    MARKETPLACE = "marketplace"
    ORDERS = "orders"
    ADMIN = "admin"


VIEW_LABELS = {
    View.HOME: "Home",
    View.DASHBOARD: "Dashboard",
    View.SCAN: "Scan Tree",
    View.MARKETPLACE: "Marketplace",
    View.ORDERS: "My Orders",
    View.ADMIN: "Admin",
}

MEMBER_VIEWS = (View.DASHBOARD, View.SCAN, View.MARKETPLACE, View.ORDERS)


def available_views(signed_in: bool, is_admin: bool) -> list[View]:
    """Views reachable for the caller, in menu order."""
    if not signed_in:
        return [View.HOME]
    views = list(MEMBER_VIEWS)
    if is_admin:
        views.append(View.ADMIN)
    return views


def default_view(signed_in: bool) -> View:
    return View.DASHBOARD if signed_in else View.HOME


def resolve_view(requested: Optional[str], signed_in: bool, is_admin: bool) -> View:
    """The view to show: the requested one if reachable, else the default."""
    allowed = available_views(signed_in, is_admin)
    try:
        view = View(requested) if requested else None
    except ValueError:
        view = None
    if view in allowed:
        return view
    return default_view(signed_in)


def view_after_sign_out() -> View:
    return View.HOME


def view_after_scan() -> View:
    return View.DASHBOARD
