# 📄 File: app/shared/utils/__init__.py

# 🧭 Purpose (Layman Explanation):
# A collection of helpful tools that other parts of the app use for common tasks
# like logging and checking the shape of input values.

# 🧪 Purpose (Technical Summary):
# Utilities package: structured logging setup and total value predicates.

# 🔗 Dependencies:
# - logging: Structured logging utilities
# - validators: Value predicates

# 🔄 Connected Modules / Calls From:
# Used by: policy rules, middleware, application startup
