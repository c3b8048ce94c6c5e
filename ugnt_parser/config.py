# config.py
"""
Central settings for the UGNT parser. Directory locations, the file
extension we look for, and the local LLM endpoint all live here so the
scripts and the CLI read them from one place.
"""

import os
from dotenv import load_dotenv

# Load environment variables from a .env file (if one exists)
load_dotenv()

# --- Corpus locations ---

UGNT_DIR = os.getenv("UGNT_DIR", "ugnt")
USFM_EXTENSION = os.getenv("USFM_EXTENSION", ".usfm")
OUTPUT_DIR = os.getenv("OUTPUT_DIR", "output")

# --- Strong's dictionary locations ---

STRONG_DIR = os.getenv("STRONG_DIR", "strong")
STRONG_OUTPUT_DIR = os.getenv("STRONG_OUTPUT_DIR", "strong_output")
STRONG_OUTPUT_FILE = "strong_output.json"

# --- LLM (OpenAI-compatible, defaults to a local Ollama server) ---

LLM_BASE_URL = os.getenv("LLM_BASE_URL", "http://localhost:11434/v1")
LLM_MODEL = os.getenv("LLM_MODEL", "llama3.2") or "llama3.2"
# Ollama ignores the key but the client refuses to start without one
LLM_API_KEY = os.getenv("OPENAI_API_KEY", "ollama") or "ollama"
LLM_MAX_RETRIES = int(os.getenv("LLM_MAX_RETRIES", "4"))

# --- Logging ---

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
LOG_FORMAT = "%(asctime)s - %(levelname)s - %(message)s"
