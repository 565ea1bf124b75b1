"""
incident_analytics/api/routers package marker.
"""

from incident_analytics.api.routers.analysis import router as analysis_router

__all__ = [
    "analysis_router",
]
