import json, logging
from typing import Optional, Sequence

import httpx
from pydantic import ValidationError
from tenacity import retry, retry_if_exception_type, stop_after_attempt, wait_fixed

from moodhome.core.config import settings
from moodhome.core.errors import GeneratorFailure
from moodhome.db.models import Contact
from moodhome.schemas.suggestion import SuggestionDraft

log = logging.getLogger(__name__)

MAX_DRAFTS = 3

SYSTEM = (
  "You are a compassionate AI therapy assistant helping someone who just completed an emotional check-in.\n"
  "Provide 1-3 specific, actionable suggestions for immediate support.\n"
)

RESPONSE_FORMAT = """RESPONSE FORMAT (JSON):
{
  "suggestions": [
    {
      "title": "Brief, caring title",
      "description": "Empathetic explanation",
      "type": "SOCIAL_SUPPORT|SMART_ENVIRONMENT|WELLNESS|THERAPEUTIC|EMERGENCY",
      "priority": "LOW|MEDIUM|HIGH|URGENT",
      "actions": [
        {
          "type": "CALL_CONTACT|SMART_HOME_ENVIRONMENT|THERAPEUTIC_ACTIVITY|REMINDER|MANUAL_GUIDANCE",
          "displayText": "What the user sees",
          "parameters": {"environment": "anxiety_relief|mood_boost|focus_clarity|deep_relaxation", "duration": "15"}
        }
      ],
      "reasoning": "Brief therapeutic rationale",
      "duration": "estimated time"
    }
  ]
}
GUIDELINES:
- Prioritize safety: detect crisis indicators and suggest professional help
- Consider time of day
- For severe distress: include crisis hotline (988)
- Use warm, non-clinical language
- Limit to 3 suggestions maximum
Respond with valid JSON only."""


def build_prompt(
    emotions: Sequence[str],
    note: Optional[str],
    contacts: Sequence[Contact],
    time_of_day: str,
    recent_history: Sequence[str] = (),
) -> str:
    contact_info = ", ".join(f"{c.name} ({c.relationship})" for c in list(contacts)[:3])
    return (
        f"{SYSTEM}\n"
        "EMOTIONAL STATE:\n"
        f"- Current emotions: {', '.join(emotions)}\n"
        f"- Thoughts: {note or 'Not provided'}\n"
        f"- Time of day: {time_of_day}\n"
        f"- Available contacts: {contact_info}\n"
        f"- Recent patterns: {'; '.join(recent_history)}\n\n"
        f"{RESPONSE_FORMAT}"
    )


def _request_body(prompt: str) -> dict:
    return {
        "contents": [{"role": "user", "parts": [{"text": prompt}]}],
        "generationConfig": {
            "temperature": settings.GEMINI_TEMPERATURE,
            "topK": settings.GEMINI_TOP_K,
            "topP": settings.GEMINI_TOP_P,
            "maxOutputTokens": settings.GEMINI_MAX_OUTPUT_TOKENS,
        },
    }


# only transport problems are worth another attempt; a bad status or body will not improve
@retry(stop=stop_after_attempt(3), wait=wait_fixed(1),
       retry=retry_if_exception_type(httpx.TransportError), reraise=True)
async def _generate_content(prompt: str) -> str:
    url = f"{settings.GEMINI_BASE_URL}/models/{settings.GEMINI_MODEL}:generateContent"
    timeout_config = httpx.Timeout(settings.GEMINI_TIMEOUT_SECONDS, connect=15.0)
    async with httpx.AsyncClient(timeout=timeout_config) as client:
        r = await client.post(url, params={"key": settings.GEMINI_API_KEY}, json=_request_body(prompt))
        r.raise_for_status()
        data = r.json()
    parts = data["candidates"][0]["content"]["parts"]
    return "".join(p.get("text", "") for p in parts)


def parse_response(text: str, contacts: Sequence[Contact]) -> list[SuggestionDraft]:
    """
    Pull the JSON object out of the model text (it sometimes wraps it in
    prose or code fences) and validate each suggestion. Raises ValueError,
    KeyError or ValidationError when the payload is unusable.
    """
    start, end = text.find("{"), text.rfind("}")
    if start == -1 or end <= start:
        raise ValueError("no JSON object in generator response")
    payload = json.loads(text[start:end + 1])
    items = payload["suggestions"]
    if not isinstance(items, list):
        raise ValueError("suggestions is not a list")

    first_contact = contacts[0] if contacts else None
    drafts: list[SuggestionDraft] = []
    for raw in items:
        draft = SuggestionDraft.model_validate(raw)
        if not draft.title:
            continue
        for action in draft.actions:
            if action.type == "CALL_CONTACT" and first_contact is not None and not action.target_id:
                action.target_id = first_contact.id
                action.parameters = {"phoneNumber": first_contact.phone_number, "contactName": first_contact.name}
        drafts.append(draft)
        if len(drafts) == MAX_DRAFTS:
            break
    return drafts


async def generate_suggestions(
    emotions: Sequence[str],
    note: Optional[str],
    contacts: Sequence[Contact],
    time_of_day: str,
    recent_history: Sequence[str] = (),
) -> list[SuggestionDraft]:
    """
    Ask Gemini for up to three suggestions for a check-in.

    Every failure mode (missing key, transport, HTTP status, unparseable
    body) surfaces as GeneratorFailure; nothing is silently swallowed.
    """
    if not settings.GEMINI_API_KEY:
        raise GeneratorFailure("GEMINI_API_KEY is not configured")

    prompt = build_prompt(emotions, note, contacts, time_of_day, recent_history)
    log.info("Requesting suggestions from %s for %d emotion(s)", settings.GEMINI_MODEL, len(emotions))
    try:
        text = await _generate_content(prompt)
    except httpx.HTTPStatusError as e:
        log.error("Gemini HTTP error %s: %s", e.response.status_code, e.response.text[:200])
        raise GeneratorFailure(f"generator returned HTTP {e.response.status_code}") from e
    except httpx.HTTPError as e:
        log.error("Gemini request failed: %s", e)
        raise GeneratorFailure(f"generator request failed: {e}") from e
    except (KeyError, IndexError, TypeError, ValueError) as e:
        log.error("Gemini response had no candidate text: %s", e)
        raise GeneratorFailure("generator response had no candidates") from e

    try:
        drafts = parse_response(text, contacts)
    except (ValidationError, KeyError, TypeError, ValueError) as e:
        log.warning("Could not parse generator response: %s", e)
        raise GeneratorFailure("generator response could not be parsed") from e
    log.info("Generator produced %d suggestion(s)", len(drafts))
    return drafts
