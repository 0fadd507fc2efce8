# Copyright (c) 2025 Joël Krügel
# License: GPL-3.0
# See LICENSE file in the project root for details.

"""Which dashboard sections a user may open.

The dashboard keeps a selected view (and, inside ``configuration``, a tab).
Whenever the permissions of the last fetch no longer allow that selection it
falls back: ``user`` management is admin-only, ``system`` needs
``canConfigure``, ``monitoring`` needs ``canMonitor``, and everything else ends
on ``dashboard``.
"""

DASHBOARD = "dashboard"
MONITORING = "monitoring"
CONFIGURATION = "configuration"
VIEWS = (DASHBOARD, MONITORING, CONFIGURATION)

SYSTEM_TAB = "system"
USER_TAB = "user"
TABS = (SYSTEM_TAB, USER_TAB)


def _flags(permissions: dict):
    permissions = permissions or {}
    return bool(permissions.get("canMonitor")), bool(permissions.get("canConfigure"))


def visible_sections(permissions: dict, is_admin: bool) -> list:
    can_monitor, can_configure = _flags(permissions)
    sections = [DASHBOARD]
    if can_monitor or is_admin:
        sections.append(MONITORING)
    if can_configure or is_admin:
        sections.append(CONFIGURATION)
    return sections


def reconcile(view: str, tab: str, permissions: dict, is_admin: bool):
    """Return the ``(view, tab)`` the user actually ends up on."""
    can_monitor, can_configure = _flags(permissions)
    view = view if view in VIEWS else DASHBOARD
    tab = tab if tab in TABS else SYSTEM_TAB

    if view == MONITORING and not can_monitor and not is_admin:
        view = DASHBOARD
    if view == CONFIGURATION and not can_configure and not is_admin:
        view = DASHBOARD
    if view == CONFIGURATION and tab == USER_TAB and not is_admin:
        if can_configure:
            tab = SYSTEM_TAB
        else:
            view = DASHBOARD
    return view, tab
