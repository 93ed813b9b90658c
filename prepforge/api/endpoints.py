import fastapi

from prepforge.api.routes.bookmarks import router as bookmarks_router
from prepforge.api.routes.history import router as history_router
from prepforge.api.routes.interviews import router as interviews_router
from prepforge.api.routes.users import router as users_router

router = fastapi.APIRouter()


@router.get("/health", status_code=200, tags=["health"])
async def health_check():
    return {"success": True, "data": {"status": "healthy", "service": "prepforge-backend"}}


router.include_router(router=users_router)
router.include_router(router=interviews_router)
router.include_router(router=history_router)
router.include_router(router=bookmarks_router)
