"""Language-model document analysis and application optimization.

Talks to an OpenAI-compatible chat-completions endpoint through the
``openai`` SDK in JSON response mode. Prompts live in
``careertrail/templates`` as Jinja2 files.

Usage:
    llm = LLMClient(get_config().ai)
    result = await analyze_document(DocumentAnalysisRequest(content=text), llm)
"""

import json
import logging
import re
from datetime import date
from pathlib import Path
from typing import Any, Optional

import httpx
import openai
from jinja2 import Environment, FileSystemLoader
from openai import AsyncOpenAI

from careertrail.config import AIConfig, get_config
from careertrail.errors import NotConfiguredError, UpstreamError
from careertrail.schemas import DocumentAnalysisRequest, OptimizationRequest

logger = logging.getLogger(__name__)

TEMPLATE_DIR = Path(__file__).parent.parent / "templates"

OPTIMIZABLE_TYPES = ("resume", "cover_letter")

_jinja = Environment(
    loader=FileSystemLoader(str(TEMPLATE_DIR)),
    autoescape=False,
    keep_trailing_newline=True,
)


def render_prompt(name: str, **context) -> str:
    return _jinja.get_template(name).render(**context)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def sanitize_json(raw: str) -> str:
    """Strip Markdown code fences and cut down to the outermost ``{...}``."""
    text = raw.strip()
    if text.startswith("```"):
        text = re.sub(r"^```[a-zA-Z]*\n?", "", text)
        text = re.sub(r"```\s*$", "", text).strip()
    if not text.startswith("{"):
        start, end = text.find("{"), text.rfind("}")
        if start != -1 and end > start:
            text = text[start:end + 1]
    return text


def document_type_from_filename(filename: str) -> str:
    name = filename.lower()
    if "resume" in name or "cv" in name:
        return "resume"
    if "cover" in name or "letter" in name:
        return "cover_letter"
    return "other"


def score_label(score: float) -> str:
    if score >= 80:
        return "Excellent"
    if score >= 60:
        return "Good"
    if score >= 40:
        return "Fair"
    return "Needs Improvement"


def quick_optimization_score(content: str, keywords: list[str]) -> int:
    """Local 0-100 estimate: keyword coverage averaged with a length score."""
    if keywords:
        lowered = content.lower()
        matched = sum(1 for k in keywords if k.lower() in lowered)
        keyword_score = min(matched / len(keywords) * 100, 100)
    else:
        keyword_score = 0.0
    length_score = 100 if len(content) > 500 else len(content) / 500 * 100
    return round((keyword_score + length_score) / 2)


# ---------------------------------------------------------------------------
# Model client
# ---------------------------------------------------------------------------

class LLMClient:
    """Chat-completions wrapper returning parsed JSON objects.

    Args:
        config: Model settings; defaults to ``get_config().ai``
        http_client: Shared ``httpx.AsyncClient`` handed to the SDK (left open)
    """

    def __init__(self, config: Optional[AIConfig] = None, http_client: Optional[httpx.AsyncClient] = None):
        self.config = config or get_config().ai
        self._http_client = http_client

    @property
    def is_configured(self) -> bool:
        return bool(self.config.api_key)

    async def _create(self, **kwargs):
        client = AsyncOpenAI(
            api_key=self.config.api_key,
            base_url=self.config.base_url,
            timeout=self.config.timeout_s,
            max_retries=self.config.max_retries,
            http_client=self._http_client,
        )
        try:
            return await client.chat.completions.create(**kwargs)
        finally:
            if self._http_client is None:
                await client.close()

    async def complete_json(
        self,
        system: str,
        prompt: str,
        temperature: Optional[float] = None,
        max_tokens: Optional[int] = None,
    ) -> dict[str, Any]:
        if not self.is_configured:
            raise NotConfiguredError("OPENAI_API_KEY is not configured")

        try:
            response = await self._create(
                model=self.config.model,
                messages=[
                    {"role": "system", "content": system},
                    {"role": "user", "content": prompt},
                ],
                response_format={"type": "json_object"},
                temperature=self.config.temperature if temperature is None else temperature,
                max_tokens=max_tokens or self.config.max_tokens,
            )
        except openai.APIStatusError as e:
            logger.error(f"Model request failed: {e.status_code} {e.message[:200]}")
            raise UpstreamError(f"Model request failed with status {e.status_code}")
        except openai.APIConnectionError as e:
            logger.error(f"Model request failed: {e}")
            raise UpstreamError(f"Model request failed: {e}")

        content = response.choices[0].message.content if response.choices else None
        if not content:
            raise UpstreamError("No response from model")

        try:
            parsed = json.loads(sanitize_json(content))
        except json.JSONDecodeError as e:
            raise UpstreamError(f"Model returned invalid JSON: {e}")
        if not isinstance(parsed, dict):
            raise UpstreamError("Model returned JSON that is not an object")
        return parsed


# ---------------------------------------------------------------------------
# Operations
# ---------------------------------------------------------------------------

async def analyze_document(request: DocumentAnalysisRequest, llm: Optional[LLMClient] = None) -> dict[str, Any]:
    """Score a resume/cover letter and collect feedback.

    The document type falls back to the filename when the caller sends
    ``other`` with a filename. The result gains a ``scoreLabel`` key.
    """
    llm = llm or LLMClient()
    document_type = request.document_type
    if document_type == "other" and request.filename:
        document_type = document_type_from_filename(request.filename)

    prompt = render_prompt(
        "analyze_document.j2",
        document_type=document_type,
        content=request.content,
        target_role=request.target_role,
        target_company=request.target_company,
        industry=request.industry,
        today=date.today().isoformat(),
    )
    analysis = await llm.complete_json(
        "You are an expert career coach and HR professional. Provide detailed, "
        "actionable feedback for job application documents. Always respond with valid JSON.",
        prompt,
    )
    analysis.setdefault("category", document_type)
    score = analysis.get("score")
    if isinstance(score, (int, float)):
        analysis["scoreLabel"] = score_label(score)
    logger.info(f"Analyzed {document_type}: score={score}")
    return analysis


async def analyze_job_description(job_description: str, llm: Optional[LLMClient] = None) -> dict[str, Any]:
    llm = llm or LLMClient()
    prompt = render_prompt("analyze_job.j2", job_description=job_description)
    return await llm.complete_json(
        "You are an expert recruiter and career coach. Analyze job descriptions to "
        "extract key optimization insights for job applications. Always return valid JSON.",
        prompt,
    )


async def optimize_application(request: OptimizationRequest, llm: Optional[LLMClient] = None) -> dict[str, Any]:
    """Rewrite a resume or cover letter towards a job description.

    Two model calls: the job description is analysed first, then the
    content is optimised against that analysis. ``quickScore`` is the local
    keyword-coverage estimate for the unmodified content.

    Raises:
        ValueError: content_type is not resume or cover_letter
    """
    if request.content_type not in OPTIMIZABLE_TYPES:
        raise ValueError('content_type must be either "resume" or "cover_letter"')

    llm = llm or LLMClient()
    job = await analyze_job_description(request.job_description, llm)
    prompt = render_prompt(
        "optimize_application.j2",
        content_type=request.content_type,
        current_content=request.current_content,
        target_role=request.target_role,
        target_company=request.target_company,
        job=job,
    )
    result = await llm.complete_json(
        f"You are an expert career coach specializing in {request.content_type} optimization. "
        "You help job seekers improve their applications without adding false information. "
        "Always return valid JSON.",
        prompt,
        temperature=0.4,
        max_tokens=4000,
    )
    result["jobAnalysis"] = job
    result["quickScore"] = quick_optimization_score(
        request.current_content, [str(k) for k in job.get("keywords") or []]
    )
    logger.info(
        f"Optimized {request.content_type}: "
        f"{result.get('originalScore')} → {result.get('optimizedScore')}"
    )
    return result
