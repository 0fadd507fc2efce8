# Copyright (c) 2025 Joël Krügel
# License: GPL-3.0
# See LICENSE file in the project root for details.

from .settings import settings
from .security import manager, get_current_user, admin_required, permission_required

# Export public API / Öffentliche API exportieren
__all__ = ['settings', 'manager', 'get_current_user', 'admin_required', 'permission_required']
