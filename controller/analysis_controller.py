# controller/analysis_controller.py
from fastapi import APIRouter, Depends, status
from fastapi.responses import StreamingResponse
from controller.controller_dependencies import (
    get_analysis_service,
    get_client_id,
    rate_limit,
)
from model.api import AnalysisResponse, AnalyzeRequest
from service.analysis_service import AnalysisService
from util.constants import InternalURIs

analysis_router = APIRouter(dependencies=[Depends(rate_limit)], tags=["analysis"])


@analysis_router.post(
    InternalURIs.ANALYZE,
    response_model=AnalysisResponse,
    status_code=status.HTTP_200_OK,
)
async def analyze(
    payload: AnalyzeRequest,
    client_id: str = Depends(get_client_id),
    service: AnalysisService = Depends(get_analysis_service),
) -> AnalysisResponse:
    return await service.analyze(client_id, payload)


@analysis_router.post(InternalURIs.ANALYZE_STREAM)
async def analyze_stream(
    payload: AnalyzeRequest,
    client_id: str = Depends(get_client_id),
    service: AnalysisService = Depends(get_analysis_service),
):
    # Limit/input/key errors surface as plain HTTP errors before streaming starts
    job = await service.prepare(client_id, payload)
    return StreamingResponse(service.stream(job), media_type="application/x-ndjson")
