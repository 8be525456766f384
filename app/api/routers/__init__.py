"""
app/api/routers package marker.
"""

from app.api.routers.donor_router import router as donor_router
from app.api.routers.impact_router import router as impact_router
from app.api.routers.import_router import router as import_router
from app.api.routers.segmentation_router import router as segmentation_router
from app.api.routers.volunteer_router import router as volunteer_router

__all__ = [
    "donor_router",
    "impact_router",
    "import_router",
    "segmentation_router",
    "volunteer_router",
]
