# 📄 File: app/__init__.py
#
# 🧭 Purpose (Layman Explanation):
# The main entry point that tells Python this 'app' folder contains our CV Builder code
# and sets up the basic version and package information.
#
# 🧪 Purpose (Technical Summary):
# Application package initialization with version info for the CV Builder FastAPI service.
#
# 🔗 Dependencies:
# - Python packaging system
#
# 🔄 Connected Modules / Calls From:
# - main.py (application entry point)
# - Package imports throughout the application

"""
CV Builder Application - policy and quota enforcement backend.

Validates CV content, decides who may create, download and share CVs,
and enforces the per-role usage limits.
"""

__version__ = "1.0.0"
__title__ = "CV Builder Backend API"
__description__ = "CV builder backend with policy and quota enforcement"

__all__ = [
    "__version__",
    "__title__",
    "__description__",
]
