"""
LinkedIn API Endpoint
"""

import logging

from fastapi import APIRouter, Depends, HTTPException

from careertrail.auth import get_current_user
from careertrail.db.models import User
from careertrail.schemas import LinkedInJobInfo, LinkedInParseRequest
from careertrail.services import linkedin

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/parse", response_model=LinkedInJobInfo)
async def parse_linkedin_url(
    request: LinkedInParseRequest,
    current_user: User = Depends(get_current_user),
):
    """Parse a LinkedIn job URL; with fetch_details, read the public posting too.

    Fields the posting provides win over fields guessed from the URL.
    """
    info = linkedin.parse_job_url(request.url)
    if info is None:
        raise HTTPException(status_code=400, detail="Invalid LinkedIn job URL")
    if not request.fetch_details:
        return info

    try:
        details = await linkedin.fetch_job_details(info.job_id)
    except linkedin.JobNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except linkedin.RateLimitError as e:
        raise HTTPException(status_code=429, detail=str(e))
    except linkedin.LinkedInError as e:
        logger.warning(f"LinkedIn lookup failed for {info.job_id}: {e}")
        raise HTTPException(status_code=502, detail=str(e))

    merged = info.model_dump()
    merged.update({k: v for k, v in details.model_dump().items() if v is not None})
    merged["job_url"] = info.job_url
    return LinkedInJobInfo(**merged)
