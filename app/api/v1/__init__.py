# 📄 File: app/api/v1/__init__.py
# 🧭 Purpose (Layman Explanation):
# Organizes version 1 of the CV Builder API so later versions can be added without breaking clients.
# 🧪 Purpose (Technical Summary):
# Package initialization for API version 1 with route prefix configuration.
# 🔗 Dependencies:
# None
# 🔄 Connected Modules / Calls From:
# app.api.v1.router, app.main.py

__api_version__ = "v1"

# Module route prefixes under /api/v1
ROUTE_PREFIXES = {
    "cvs": "/cvs",
}
