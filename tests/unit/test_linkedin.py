"""Tests for LinkedIn URL parsing and job page scraping."""
import httpx
import pytest

from careertrail.services.linkedin import (
    JobNotFoundError,
    LinkedInError,
    ParseError,
    RateLimitError,
    extract_company_from_url,
    extract_job_id,
    extract_job_title_from_url,
    fetch_job_details,
    is_valid_linkedin_job_url,
    parse_job_html,
    parse_job_url,
)

JOB_PAGE = """
<html><body>
  <h1 class="top-card-layout__title">Senior Python Engineer</h1>
  <a class="topcard__org-name-link" href="#">Acme Corp</a>
  <span class="topcard__flavor topcard__flavor--bullet">Berlin, Germany</span>
  <div class="description__text">
    <div class="show-more-less-html__markup">Build things.<br>Ship them.</div>
  </div>
</body></html>
"""


class TestUrlParsing:

    @pytest.mark.parametrize("url,expected", [
        ("https://www.linkedin.com/jobs/view/4257191625/", True),
        ("https://linkedin.com/jobs/view/4257191625", True),
        ("https://www.linkedin.com/in/someone/", False),
        ("https://example.com/jobs/view/4257191625", False),
        ("not a url", False),
    ])
    def test_is_valid_linkedin_job_url(self, url, expected):
        assert is_valid_linkedin_job_url(url) is expected

    def test_extract_job_id(self):
        assert extract_job_id("https://www.linkedin.com/jobs/view/4257191625/?refId=x") == "4257191625"
        assert extract_job_id("https://www.linkedin.com/jobs/view/") is None

    def test_title_slug(self):
        url = "https://www.linkedin.com/jobs/view/42/senior-python-engineer"
        assert extract_job_title_from_url(url) == "senior python engineer"
        assert extract_job_title_from_url("https://www.linkedin.com/jobs/view/42") is None

    def test_company_path(self):
        url = "https://www.linkedin.com/company/acme-corp/jobs/view/42"
        assert extract_company_from_url(url) == "acme corp"

    def test_parse_job_url_reads_location_query(self):
        info = parse_job_url("https://www.linkedin.com/jobs/view/42/?location=Berlin")
        assert info.job_id == "42"
        assert info.location == "Berlin"
        assert info.company is None

    def test_parse_job_url_rejects_other_urls(self):
        assert parse_job_url("https://example.com/jobs/view/42") is None


class TestPageParsing:

    def test_extracts_fields(self):
        info = parse_job_html("42", JOB_PAGE)
        assert info.job_title == "Senior Python Engineer"
        assert info.company == "Acme Corp"
        assert info.location == "Berlin, Germany"
        assert info.description == "Build things.\nShip them."
        assert info.job_url == "https://www.linkedin.com/jobs/view/42"

    def test_subtitle_fallback_for_company(self):
        html = '<h1>Engineer</h1><div class="topcard__subtitle">Globex · Remote</div>'
        assert parse_job_html("1", html).company == "Globex"

    def test_missing_company_is_a_parse_error(self):
        with pytest.raises(ParseError, match="company"):
            parse_job_html("1", "<h1>Engineer</h1>")

    def test_missing_title_is_a_parse_error(self):
        with pytest.raises(ParseError, match="title"):
            parse_job_html("1", "<p>nothing here</p>")


def _client(handler):
    return httpx.AsyncClient(transport=httpx.MockTransport(handler))


class TestFetch:

    @pytest.mark.asyncio
    async def test_fetches_guest_posting(self):
        seen = []

        def handler(request):
            seen.append(request)
            return httpx.Response(200, text=JOB_PAGE)

        async with _client(handler) as client:
            info = await fetch_job_details("42", client=client)

        assert info.company == "Acme Corp"
        assert seen[0].url.path.endswith("/jobPosting/42")
        assert "Mozilla" in seen[0].headers["User-Agent"]

    @pytest.mark.asyncio
    @pytest.mark.parametrize("status,error", [
        (404, JobNotFoundError),
        (429, RateLimitError),
        (503, LinkedInError),
    ])
    async def test_status_errors(self, status, error):
        async with _client(lambda request: httpx.Response(status, headers={"Retry-After": "30"})) as client:
            with pytest.raises(error):
                await fetch_job_details("42", client=client)

    @pytest.mark.asyncio
    async def test_rate_limit_mentions_retry_after(self):
        async with _client(lambda request: httpx.Response(429, headers={"Retry-After": "30"})) as client:
            with pytest.raises(RateLimitError, match="30 seconds"):
                await fetch_job_details("42", client=client)

    @pytest.mark.asyncio
    async def test_timeout(self):
        def handler(request):
            raise httpx.ConnectTimeout("slow", request=request)

        async with _client(handler) as client:
            with pytest.raises(LinkedInError, match="timed out"):
                await fetch_job_details("42", client=client)
