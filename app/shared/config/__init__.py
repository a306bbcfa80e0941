# 📄 File: app/shared/config/__init__.py
#
# 🧭 Purpose (Layman Explanation):
# Contains the settings that tell the CV Builder how to connect to its database
# and which business rules and limits to apply.
#
# 🧪 Purpose (Technical Summary):
# Configuration package exporting the settings model and its cached factory.
#
# 🔗 Dependencies:
# - settings.py (application settings)
#
# 🔄 Connected Modules / Calls From:
# - app.main (application startup)
# - All modules requiring configuration

from .settings import get_settings, Settings

__all__ = [
    "get_settings",
    "Settings",
]
