"""Async REST client for the CareerTrail API.

Usage:
    async with CareerTrailClient(base_url, token) as api:
        jobs = await api.list_jobs()
        board = StatusBoard(jobs, api.update_job_status)
"""

import logging
from typing import Any, Optional

import httpx

from careertrail.config import get_config
from careertrail.errors import CareerTrailError
from careertrail.schemas import JobCreate, JobMetrics, JobRead

logger = logging.getLogger(__name__)


class APIError(CareerTrailError):
    """Non-2xx response from the API."""

    def __init__(self, status_code: int, detail: str):
        self.status_code = status_code
        self.detail = detail
        super().__init__(f"{status_code}: {detail}")


class CareerTrailClient:
    def __init__(
        self,
        base_url: Optional[str] = None,
        token: Optional[str] = None,
        timeout: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        cfg = get_config().client
        headers = {}
        token = token or cfg.token
        if token:
            headers["Authorization"] = f"Bearer {token}"
        self._http = httpx.AsyncClient(
            base_url=base_url or cfg.base_url,
            headers=headers,
            timeout=timeout,
            transport=transport,
        )

    async def __aenter__(self) -> "CareerTrailClient":
        return self

    async def __aexit__(self, *exc) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._http.aclose()

    async def _request(self, method: str, path: str, **kwargs) -> Any:
        resp = await self._http.request(method, path, **kwargs)
        if resp.status_code >= 400:
            try:
                detail = resp.json().get("detail", resp.text)
            except ValueError:
                detail = resp.text
            raise APIError(resp.status_code, str(detail))
        if resp.status_code == 204:
            return None
        return resp.json()

    # --- jobs ---

    async def list_jobs(self, search: Optional[str] = None, status: Optional[str] = None) -> list[JobRead]:
        params = {k: v for k, v in {"search": search, "status": status}.items() if v}
        data = await self._request("GET", "/api/jobs", params=params)
        return [JobRead.model_validate(item) for item in data]

    async def get_job(self, job_id: str) -> JobRead:
        return JobRead.model_validate(await self._request("GET", f"/api/jobs/{job_id}"))

    async def create_job(self, job: JobCreate) -> JobRead:
        data = await self._request("POST", "/api/jobs", json=job.model_dump(mode="json"))
        return JobRead.model_validate(data)

    async def update_job_status(self, job_id: str, status: str) -> JobRead:
        """Persist a board move; raises APIError or httpx.HTTPError on failure."""
        data = await self._request("PATCH", f"/api/jobs/{job_id}/status", json={"status": status})
        logger.debug(f"Job {job_id} persisted as {status}")
        return JobRead.model_validate(data)

    async def delete_job(self, job_id: str) -> None:
        await self._request("DELETE", f"/api/jobs/{job_id}")

    async def board(self) -> dict[str, list[JobRead]]:
        data = await self._request("GET", "/api/jobs/board")
        return {status: [JobRead.model_validate(j) for j in jobs] for status, jobs in data.items()}

    # --- metrics ---

    async def metrics(self) -> JobMetrics:
        return JobMetrics.model_validate(await self._request("GET", "/api/metrics"))
