"""LinkedIn job URL parsing and public job-posting lookup.

URL helpers are pure and never raise; they return ``None`` for anything
that is not a LinkedIn job view URL. ``fetch_job_details`` calls LinkedIn's
unauthenticated guest endpoint:

    https://www.linkedin.com/jobs-guest/jobs/api/jobPosting/{job_id}
"""

import logging
import re
from typing import Optional
from urllib.parse import parse_qs, unquote, urlparse

import httpx
from bs4 import BeautifulSoup

from careertrail.config import get_config
from careertrail.errors import UpstreamError
from careertrail.schemas import LinkedInJobInfo

logger = logging.getLogger(__name__)

LINKEDIN_HOSTS = ("www.linkedin.com", "linkedin.com")

# LinkedIn rejects requests without a browser user agent
HEADERS = {
    "User-Agent": "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36",
    "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
    "Accept-Language": "en-US,en;q=0.5",
}


class LinkedInError(UpstreamError):
    """Base exception for LinkedIn lookups."""
    pass


class JobNotFoundError(LinkedInError):
    """The job posting does not exist (or is no longer public)."""
    pass


class RateLimitError(LinkedInError):
    """LinkedIn throttled the request."""
    pass


class ParseError(LinkedInError):
    """The posting page did not have the expected structure."""
    pass


# ---------------------------------------------------------------------------
# URL parsing
# ---------------------------------------------------------------------------

def _path_parts(url: str) -> Optional[list[str]]:
    try:
        return urlparse(url).path.split("/")
    except ValueError:
        return None


def _humanize(segment: str) -> str:
    return unquote(segment).replace("-", " ")


def is_valid_linkedin_job_url(url: str) -> bool:
    try:
        parsed = urlparse(url)
    except ValueError:
        return False
    return parsed.hostname in LINKEDIN_HOSTS and "/jobs/view/" in parsed.path


def extract_job_id(url: str) -> Optional[str]:
    """``https://www.linkedin.com/jobs/view/4257191625`` -> ``"4257191625"``"""
    parts = _path_parts(url)
    if not parts or "view" not in parts:
        return None
    index = parts.index("view")
    if index + 1 < len(parts) and parts[index + 1]:
        return parts[index + 1]
    return None


def extract_job_title_from_url(url: str) -> Optional[str]:
    """Title slug after the id, e.g. ``/jobs/view/42/senior-engineer``."""
    parts = _path_parts(url)
    if not parts or "view" not in parts:
        return None
    index = parts.index("view")
    if index + 2 >= len(parts):
        return None
    segment = parts[index + 2]
    if not segment or segment in ("jobs", "view"):
        return None
    title = _humanize(segment)
    if len(title) > 3 and not title.isdigit():
        return title
    return None


def extract_company_from_url(url: str) -> Optional[str]:
    parts = _path_parts(url)
    if not parts:
        return None

    # /company/<name>/jobs/view/...
    if "company" in parts:
        index = parts.index("company")
        if index + 1 < len(parts):
            company = parts[index + 1]
            if company and company not in ("jobs", "view"):
                return _humanize(company)

    # /jobs/view/<id>/.../<name>
    if "jobs" in parts:
        index = parts.index("jobs")
        for part in parts[index + 3:]:
            if part and part not in ("jobs", "view") and not part.isdigit():
                decoded = _humanize(part)
                if len(decoded) > 2:
                    return decoded
    return None


def parse_job_url(url: str) -> Optional[LinkedInJobInfo]:
    """Everything that can be read off the URL alone, or None if not a job URL."""
    if not is_valid_linkedin_job_url(url):
        return None
    job_id = extract_job_id(url)
    if not job_id:
        return None

    query = parse_qs(urlparse(url).query)
    location = (query.get("location") or query.get("city") or [None])[0]

    return LinkedInJobInfo(
        job_url=url,
        job_id=job_id,
        job_title=extract_job_title_from_url(url),
        company=extract_company_from_url(url),
        location=location,
    )


# ---------------------------------------------------------------------------
# Guest endpoint
# ---------------------------------------------------------------------------

async def fetch_job_details(
    job_id: str,
    client: Optional[httpx.AsyncClient] = None,
) -> LinkedInJobInfo:
    """Fetch and parse a public job posting.

    Args:
        job_id: Numeric LinkedIn job id
        client: Optional shared client (tests inject a mock transport)

    Raises:
        JobNotFoundError: 404
        RateLimitError: 429
        ParseError: page has no recognisable title or company
        LinkedInError: any other status or a network failure
    """
    cfg = get_config().linkedin
    url = cfg.guest_url.format(job_id=job_id)
    logger.info(f"Fetching LinkedIn job {job_id}")

    own_client = client is None
    if own_client:
        client = httpx.AsyncClient(timeout=cfg.timeout_s, follow_redirects=True)
    try:
        response = await client.get(url, headers=HEADERS)
    except httpx.TimeoutException:
        raise LinkedInError(f"Request timed out after {cfg.timeout_s}s")
    except httpx.HTTPError as e:
        raise LinkedInError(f"Network error: {e}")
    finally:
        if own_client:
            await client.aclose()

    if response.status_code == 429:
        retry_after = response.headers.get("Retry-After", "60")
        raise RateLimitError(f"LinkedIn rate limit hit. Retry after {retry_after} seconds.")
    if response.status_code == 404:
        raise JobNotFoundError(f"Job {job_id} not found on LinkedIn.")
    if response.status_code != 200:
        raise LinkedInError(
            f"LinkedIn returned status {response.status_code}: {response.text[:200]}"
        )

    info = parse_job_html(job_id, response.text)
    logger.info(f"Fetched LinkedIn job {job_id}: {info.job_title} at {info.company}")
    return info


def parse_job_html(job_id: str, html: str) -> LinkedInJobInfo:
    soup = BeautifulSoup(html, "html.parser")

    title = _extract_title(soup)
    if not title:
        raise ParseError("Could not extract job title from LinkedIn page")
    company = _extract_company(soup)
    if not company:
        raise ParseError("Could not extract company name from LinkedIn page")

    return LinkedInJobInfo(
        job_url=f"https://www.linkedin.com/jobs/view/{job_id}",
        job_id=job_id,
        job_title=title,
        company=company,
        location=_extract_location(soup),
        description=_extract_description(soup),
    )


def _extract_title(soup: BeautifulSoup) -> Optional[str]:
    for elem in (
        soup.find("h1", class_=re.compile(r"top-card-layout__title")),
        soup.find("h2", class_=re.compile(r"title")),
        soup.find("h1"),
    ):
        if elem:
            return elem.get_text(strip=True)
    return None


def _extract_company(soup: BeautifulSoup) -> Optional[str]:
    elem = soup.find("a", class_=re.compile(r"topcard__org-name-link"))
    if elem:
        return elem.get_text(strip=True)

    subtitle = soup.find(class_=re.compile(r"subtitle"))
    if subtitle:
        text = subtitle.get_text(strip=True)
        return text.split("·")[0].strip()
    return None


def _extract_location(soup: BeautifulSoup) -> Optional[str]:
    elem = soup.find("span", class_=re.compile(r"topcard__flavor--bullet"))
    if elem:
        return elem.get_text(strip=True)
    for elem in soup.find_all(class_=re.compile(r"location")):
        text = elem.get_text(strip=True)
        if text:
            return text
    return None


def _extract_description(soup: BeautifulSoup) -> Optional[str]:
    elem = soup.find("div", class_=re.compile(r"description"))
    if elem is None:
        elem = soup.find("section", class_=re.compile(r"description"))
    if elem is None:
        return None
    inner = elem.find("div", class_=re.compile(r"show-more"))
    if inner is not None:
        elem = inner
    for br in elem.find_all("br"):
        br.replace_with("\n")
    text = elem.get_text("\n", strip=True)
    return re.sub(r"\n{3,}", "\n\n", text) or None
