from fastapi import APIRouter, Depends, Request, Response
from app.api.schemas import (
    ErrorResponse,
    HealthResponse,
    RomanizationResult,
    RomanizeFullRequest,
    RomanizeRequest,
)
from app.services.romanization import RomanizationService

router = APIRouter()
service = RomanizationService()

ERROR_RESPONSES = {
    400: {"model": ErrorResponse},
    500: {"model": ErrorResponse},
    504: {"model": ErrorResponse},
}


def get_service() -> RomanizationService:
    return service


@router.get("/health", response_model=HealthResponse)
async def health():
    return {"status": "ok", "service": "ichiran-api"}


@router.post("/api/romanize", response_model=RomanizationResult, responses=ERROR_RESPONSES)
async def romanize(req: RomanizeRequest, request: Request, svc: RomanizationService = Depends(get_service)):
    rid = getattr(request.state, "request_id", "n/a")
    return await svc.romanize(req.text, rid)


@router.post("/api/romanize/full", responses=ERROR_RESPONSES)
async def romanize_full(req: RomanizeFullRequest, request: Request, svc: RomanizationService = Depends(get_service)):
    rid = getattr(request.state, "request_id", "n/a")
    document = await svc.romanize_full(req.text, req.limit, rid)
    # ichiran-cli's JSON goes out as-is
    return Response(content=document, media_type="application/json")
