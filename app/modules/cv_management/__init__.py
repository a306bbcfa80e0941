# 📄 File: app/modules/cv_management/__init__.py
# 🧭 Purpose (Layman Explanation):
# Organizes the CV system: the rules for what a CV may contain, who may create, download or share it,
# and how many of each a user gets on their plan.
# 🧪 Purpose (Technical Summary):
# Package initialization for the CV management module: pure policy engine and quota enforcer in the
# domain layer, Supabase and in-memory data stores in infrastructure, FastAPI routes in presentation.
# 🔗 Dependencies:
# FastAPI, pydantic, supabase, app.shared.core
# 🔄 Connected Modules / Calls From:
# app.main.py, app.api.v1.router

"""
CV Management Module

Architecture follows Domain-Driven Design:
- Domain: constants, models, policy rules, quota enforcement, CVService
- Infrastructure: DataStore implementations (Supabase, in-memory)
- Presentation: API endpoints, request schemas and dependencies
"""
