"""
Profile Router - merge extracted CV data into a candidate profile
"""
from typing import Any, Dict

from fastapi import APIRouter, Body, Depends, HTTPException, Request, status

from ..schemas import MergeResponse
from ..services import (
    CandidateNotFoundError,
    MergeTimeoutError,
    MergeTransactionError,
    ProfileMergeService,
    UpstreamExtractionError,
    parse_extracted_profile,
)

router = APIRouter(prefix="/api/candidates", tags=["Profile"])


def get_merge_service(request: Request) -> ProfileMergeService:
    return request.app.state.merge_service


@router.post("/{candidate_id}/merge-cv", response_model=MergeResponse)
async def merge_cv(
    candidate_id: int,
    payload: Dict[str, Any] = Body(...),
    merge_service: ProfileMergeService = Depends(get_merge_service),
):
    """Merge an extraction result into the candidate's profile without duplicating entries."""
    try:
        extracted = parse_extracted_profile(payload)
        result = await merge_service.merge(candidate_id, extracted)
    except UpstreamExtractionError as e:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(e))
    except CandidateNotFoundError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Candidate profile not found. Please create your profile first."
        )
    except MergeTimeoutError:
        raise HTTPException(
            status_code=status.HTTP_504_GATEWAY_TIMEOUT,
            detail="CV merge took too long and was rolled back"
        )
    except MergeTransactionError:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to process CV"
        )

    return MergeResponse(
        message="CV data merged successfully",
        merge_results=result,
        extracted_summary=extracted.summary(),
    )
