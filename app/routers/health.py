from fastapi import APIRouter, Depends

from app.core.dates import utc_now
from app.dependencies import get_context
from app.services.context import InventoryContext

router = APIRouter(tags=["Health"])


@router.get("/health")
def health_check(context: InventoryContext = Depends(get_context)):
    settings = context.settings
    return {
        "status": "ok",
        "app": settings.APP_NAME,
        "environment": settings.ENVIRONMENT,
        "time": utc_now().isoformat(),
    }
