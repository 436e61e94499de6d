import os
import re
import json
import logging
from json import JSONDecodeError
from typing import Any, Dict, Optional
from openai import OpenAI, OpenAIError
from fastapi import APIRouter, Depends, HTTPException
from pydantic import ValidationError

from shopsmart.domain.ShoppingItem import ShoppingItem
from shopsmart.domain.exceptions import SuggestionError
from shopsmart.events.event_helpers import publish_suggestion_failed
from shopsmart.infra.Shopping_Repository import ShoppingRepository
from shopsmart.utilities.config import OPENAI_MODEL, OPENAI_TIMEOUT_SECONDS
from shopsmart.utilities.constants import SUGGESTION_JSON_FORMAT, SUGGESTION_PROMPT_TEMPLATE
from shopsmart.api.dependencies import get_shopping_repository
from shopsmart.utilities.validators import SuggestionRequest, SuggestSavingsOutput

logger = logging.getLogger(__name__)

SUGGESTION_FAILED_MESSAGE = "Failed to get suggestions from AI. Please try again."


# === Helper: Get OpenAI Client ===
def _get_openai_client():
    """Return an OpenAI client if OPENAI_API_KEY is set, otherwise None."""
    api_key = os.environ.get("OPENAI_API_KEY")
    if not api_key:
        return None
    return OpenAI(api_key=api_key, timeout=OPENAI_TIMEOUT_SECONDS)


def _format_price(value: Optional[float]) -> str:
    return f"{value:.2f}" if value is not None else "n/a"


def build_prompt(item: str, quantity: float, unit: str, prices: Dict[str, float]) -> str:
    return SUGGESTION_PROMPT_TEMPLATE.format(
        item=item,
        quantity=quantity,
        unit=unit,
        famila_price=_format_price(prices.get("famila")),
        lidl_price=_format_price(prices.get("lidl")),
        primoprezzo_price=_format_price(prices.get("primoprezzo")),
    ) + SUGGESTION_JSON_FORMAT


# === Suggestion request ===
def suggest_alternatives(item: str, quantity: float, unit: str, prices: Dict[str, float],
                         client: Any = None) -> SuggestSavingsOutput:
    """Ask the model for cheaper alternatives to one shopping item.

    The model's alternatives are returned as-is, neither ranked nor filtered.
    Raises SuggestionError on any failure; nothing is persisted.
    """
    client = client or _get_openai_client()
    if client is None:
        logger.warning("OPENAI_API_KEY not set, cannot request savings suggestions.")
        raise SuggestionError("OPENAI_API_KEY is not configured")

    # === OpenAI Call ===
    try:
        response = client.responses.create(
            model=OPENAI_MODEL,
            input=build_prompt(item, quantity, unit, prices),
        )
    except OpenAIError as e:
        logger.error("OpenAI request for %s failed: %s", item, e)
        raise SuggestionError(f"AI request failed: {e}") from e

    raw = (getattr(response, "output_text", None) or "").strip()
    if not raw:
        logger.warning("AI returned an empty suggestion payload for %s", item)
        raise SuggestionError("AI returned an empty response")

    parsed = _parse_json_payload(raw)
    if parsed is None:
        logger.error("AI output is not valid JSON and no JSON substring found: %.200s", raw)
        raise SuggestionError("AI returned a response that is not valid JSON")

    try:
        return SuggestSavingsOutput.model_validate(parsed)
    except ValidationError as e:
        logger.error("AI output does not match the suggestion schema: %s", e)
        raise SuggestionError("AI returned suggestions in an unexpected format") from e


# === JSON Parsing ===
def _parse_json_payload(text: str) -> Optional[Any]:
    """Decode the model output, tolerating code fences, trailing commas and chatter."""
    try:
        return json.loads(text)
    except JSONDecodeError:
        pass

    cleaned = _remove_trailing_commas(_strip_code_fences(text))
    try:
        return json.loads(cleaned)
    except JSONDecodeError:
        pass

    candidate = _extract_json_by_balancing(cleaned)
    if candidate:
        try:
            return json.loads(_remove_trailing_commas(candidate))
        except JSONDecodeError:
            logger.exception("Failed to decode extracted JSON from AI output")
    return None


# === Text Cleaning Helpers ===
def _strip_code_fences(text: str) -> str:
    """Remove common markdown code fences and leading/trailing whitespace."""
    text = re.sub(r"```(?:json)?\n(.*?)```", r"\1", text, flags=re.S)
    text = re.sub(r"^```|```$", "", text)
    return text.strip()


def _remove_trailing_commas(text: str) -> str:
    """Remove common trailing commas in JSON-like text to help json.loads succeed."""
    return re.sub(r",\s*(\}|\])", r"\1", text)


def _extract_json_by_balancing(text: str) -> Optional[str]:
    """Extract the first JSON object/array by balancing braces/brackets."""
    start = None
    stack = []
    in_string = False
    escape = False

    for i, ch in enumerate(text):
        if ch == '"' and not escape:
            in_string = not in_string
        if in_string and ch == "\\" and not escape:
            escape = True
            continue
        else:
            escape = False

        if not in_string:
            if ch in "{[":
                if start is None:
                    start = i
                stack.append(ch)
            elif ch in "}]":
                if not stack:
                    continue
                opening = stack.pop()
                if (opening == "{" and ch != "}") or (opening == "[" and ch != "]"):
                    return None
                if not stack and start is not None:
                    return text[start:i + 1]
    return None


def _suggestions_or_503(item_name: str, quantity: float, unit: str, prices: Dict[str, float]):
    try:
        result = suggest_alternatives(item_name, quantity, unit, prices)
    except SuggestionError as e:
        publish_suggestion_failed(item_name, str(e))
        raise HTTPException(status_code=503, detail=SUGGESTION_FAILED_MESSAGE)
    return result.model_dump(by_alias=True)


# === FastAPI Endpoints ===
router = APIRouter()


@router.post("/api/suggestions")
def suggest_savings(payload: SuggestionRequest):
    return _suggestions_or_503(payload.item, payload.quantity, payload.unit, payload.prices())


@router.post("/api/shopping-list/{item_id}/suggestions")
def suggest_savings_for_item(item_id: str, shopping_repo: ShoppingRepository = Depends(get_shopping_repository)):
    item: ShoppingItem = shopping_repo.get_item(item_id)
    prices = {store.value: price for store, price in item.prices.items()}
    return _suggestions_or_503(item.name, item.quantity, item.unit, prices)
