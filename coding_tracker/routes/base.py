from fastapi import APIRouter

from .. import __version__

router = APIRouter()

@router.get("/health")
def health():
    return {"status": "ok"}

@router.get("/version")
def version():
    return {"app": "coding-tracker-api", "version": __version__}
