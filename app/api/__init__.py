# 📄 File: app/api/__init__.py
# 🧭 Purpose (Layman Explanation):
# Marks the api folder as a Python package holding the web-facing parts of the CV Builder:
# the versioned routes and the helpers that wrap every request.
# 🧪 Purpose (Technical Summary):
# Package initialization for the API layer: versioned routers and request middleware.
# 🔗 Dependencies:
# None (package initialization)
# 🔄 Connected Modules / Calls From:
# app.main.py

API_PREFIX = "/api"
CURRENT_VERSION = "v1"

__all__ = [
    "API_PREFIX",
    "CURRENT_VERSION",
]
