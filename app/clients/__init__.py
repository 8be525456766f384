"""
app/clients package marker.
"""

from app.clients.impact_api_client import ImpactAPIClient, ImpactAPIError

__all__ = [
    "ImpactAPIClient",
    "ImpactAPIError",
]
