"""Craftsman card extraction endpoint.

Routes:
- POST /craftsmen/extract - Extract craftsman cards from an answer text

Dependencies: craftsman_rag.core.craftsman_parser
System role: Presentation support HTTP API
"""

from fastapi import APIRouter

from craftsman_rag.core.craftsman_parser import contains_craftsman_data, extract_craftsmen
from craftsman_rag.models.craftsman import ExtractionRequest, ExtractionResponse

router = APIRouter(prefix="/craftsmen", tags=["craftsmen"])


@router.post("/extract", response_model=ExtractionResponse)
async def extract(request: ExtractionRequest) -> ExtractionResponse:
    """Parse document blocks in ``text``; unreadable blocks are left out."""
    return ExtractionResponse(
        contains_markers=contains_craftsman_data(request.text),
        craftsmen=extract_craftsmen(request.text),
    )
