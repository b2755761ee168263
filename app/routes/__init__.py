"""
API routes

Endpoints (relative to API_PREFIX):
- /: list templates, optionally by dashboardType
- /{id}, /{id}/copy, /{id}/default, /{id}/reset: template lifecycle
- /base-templates: base template catalog and forking
- /widget-mapping: widget module metadata
"""
