# storefront/api/routers/health.py
from fastapi import APIRouter
from fastapi.responses import PlainTextResponse

router = APIRouter(tags=["health"])


@router.get("/", response_class=PlainTextResponse)
def root():
    return "Backend API is running"


@router.get("/health")
def health():
    return {"status": "ok"}
