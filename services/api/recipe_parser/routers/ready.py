from fastapi import APIRouter

from .. import __version__

router = APIRouter()


@router.get("/ready")
async def ready():
    return {"ok": True, "version": __version__}
