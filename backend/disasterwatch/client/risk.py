"""
Prompt construction and reply parsing for AI risk analysis.
"""

import json
from typing import Any, Dict

from pydantic import ValidationError

from disasterwatch.exceptions import RiskParseError
from disasterwatch.schemas.disaster import DisasterRisk

RISK_PROMPT_TEMPLATE = """
Analyze the disaster risk for {location} based on the following data:
{data}

Provide a risk assessment with the following information:
1. Overall risk level (low, medium, high, critical)
2. Most likely disaster types in the next 7 days
3. Specific areas of concern
4. Recommended preparedness actions

Format the response as a JSON object with the following structure:
{{
  "riskLevel": "low|medium|high|critical",
  "disasterTypes": [{{"type": "flood|wildfire|hurricane|earthquake", "probability": "percentage", "severity": "low|medium|high|critical"}}],
  "areasOfConcern": ["area1", "area2"],
  "recommendations": ["recommendation1", "recommendation2"]
}}
"""


def build_risk_prompt(location: str, context_data: Any) -> str:
    return RISK_PROMPT_TEMPLATE.format(
        location=location,
        data=json.dumps(context_data, default=str),
    )


def build_generate_content_payload(prompt: str) -> Dict[str, Any]:
    """Request body for a generateContent call with a single text prompt."""
    return {"contents": [{"parts": [{"text": prompt}]}]}


def extract_reply_text(payload: Any) -> str:
    """
    Concatenate the text parts of the first candidate in a generateContent reply.

    Returns an empty string when the payload has no usable candidate.
    """
    if not isinstance(payload, dict):
        return ""
    candidates = payload.get("candidates")
    if not isinstance(candidates, list) or not candidates or not isinstance(candidates[0], dict):
        return ""
    content = candidates[0].get("content")
    if not isinstance(content, dict):
        return ""
    parts = content.get("parts")
    if not isinstance(parts, list):
        return ""
    return "".join(
        part["text"] for part in parts
        if isinstance(part, dict) and isinstance(part.get("text"), str)
    )


def parse_risk_reply(text: str) -> DisasterRisk:
    """
    Parse the JSON object embedded in a free-text reply.

    Uses the span from the first '{' to the last '}'; narrative text around it
    is ignored. Raises RiskParseError when there is no such span or it does
    not hold a valid risk assessment.
    """
    start = text.find("{") if text else -1
    end = text.rfind("}") if text else -1
    if start == -1 or end < start:
        raise RiskParseError("No JSON object found in risk analysis reply")

    try:
        raw = json.loads(text[start:end + 1])
    except json.JSONDecodeError as e:
        raise RiskParseError(f"Risk analysis reply is not valid JSON: {e}") from e

    if not isinstance(raw, dict):
        raise RiskParseError("Risk analysis reply is not a JSON object")

    try:
        return DisasterRisk.model_validate(raw)
    except ValidationError as e:
        raise RiskParseError(f"Risk analysis reply has an unexpected shape: {e}") from e
