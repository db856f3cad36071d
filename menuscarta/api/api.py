"""API router composition."""

from fastapi import APIRouter

from menuscarta.api.endpoints import admin, auth, images, inventory, menu, promotions, theme

api_router: APIRouter = APIRouter()
api_router.include_router(auth.router, prefix="/auth", tags=["auth"])
api_router.include_router(admin.router, prefix="/admin", tags=["admin"])
api_router.include_router(theme.router, tags=["theme"])
api_router.include_router(menu.router, prefix="/restaurants", tags=["menu"])
api_router.include_router(promotions.router, prefix="/restaurants", tags=["promotions"])
api_router.include_router(inventory.router, prefix="/restaurants", tags=["inventory"])
api_router.include_router(images.router, prefix="/restaurants", tags=["images"])
