# 📄 File: app/shared/__init__.py
#
# 🧭 Purpose (Layman Explanation):
# Marks the 'shared' folder as a Python package containing common tools that every part
# of the CV Builder can use, like configuration, errors, security and logging.
#
# 🧪 Purpose (Technical Summary):
# Shared kernel package for cross-cutting concerns used by the application modules.
#
# 🔗 Dependencies:
# - Python packaging system
#
# 🔄 Connected Modules / Calls From:
# - All application modules importing shared utilities

__all__ = []
