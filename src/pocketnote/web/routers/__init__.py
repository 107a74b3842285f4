from pocketnote.web.routers.auth import router as auth_router
from pocketnote.web.routers.notes import router as notes_router
from pocketnote.web.routers.profile import router as profile_router
from pocketnote.web.routers.transform import router as transform_router

__all__ = [
    "auth_router",
    "notes_router",
    "profile_router",
    "transform_router",
]
