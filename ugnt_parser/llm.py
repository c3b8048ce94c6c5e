# llm.py
#   Optional path for the Strong's conversion: hand the raw markdown to a
#   chat model (a local Ollama server by default) and ask for WordEntry JSON.
#   Nothing in the USFM parser depends on this.

import json
import logging
from typing import Optional

from openai import OpenAI

import config
from models import WordEntry

logger = logging.getLogger(__name__)

INSTRUCTIONS = """You are a helpful assistant that converts Strong's Greek definitions into JSON format.
The JSON must have this shape:

{
  "word": "<greek word>",
  "strong": "<strong's number, e.g. G3056>",
  "senses": [
    {"number": "<sense number>", "definition": "<definition>", "citations": ["<reference>", ...]}
  ]
}

Only return valid JSON, do not include any other text or explanations.
Here is the content:
"""


def get_client() -> OpenAI:
    """OpenAI client pointed at the configured endpoint, with retries on transient errors."""
    return OpenAI(
        base_url=config.LLM_BASE_URL,
        api_key=config.LLM_API_KEY,
        max_retries=config.LLM_MAX_RETRIES,
    )


def query_llm(message: str, client: Optional[OpenAI] = None) -> str:
    # sends one user message and returns the reply text, "" if the call fails
    cli = client or get_client()
    try:
        resp = cli.chat.completions.create(
            model=config.LLM_MODEL,
            messages=[{"role": "user", "content": message}],
        )
    except Exception as e:
        logger.error(f"LLM request failed: {e}", exc_info=True)
        return ""

    if not resp.choices:
        logger.error(f"LLM response had no choices: {resp}")
        return ""
    return resp.choices[0].message.content or ""


def _strip_code_fence(text: str) -> str:
    # small models like to wrap JSON in ```json ... ```
    text = text.strip()
    if text.startswith("```"):
        text = text.split("\n", 1)[1] if "\n" in text else ""
        if text.rstrip().endswith("```"):
            text = text.rstrip()[:-3]
    return text.strip()


def word_entry_from_llm(content: str, client: Optional[OpenAI] = None) -> Optional[WordEntry]:
    """Asks the model to convert one markdown entry. Returns None if the reply is unusable."""
    response = query_llm(INSTRUCTIONS + " " + content, client)
    if not response:
        logger.warning("No response from LLM for entry, skipping")
        return None

    try:
        data = json.loads(_strip_code_fence(response))
    except json.JSONDecodeError as e:
        logger.warning(f"Error unmarshalling LLM response: {e}")
        return None

    if not isinstance(data, dict):
        logger.warning(f"LLM returned {type(data).__name__} instead of an object, skipping")
        return None
    return WordEntry.from_dict(data)
