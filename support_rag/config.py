import os
from dotenv import load_dotenv

# Load environment variables from a .env file
load_dotenv(override=True)

# --- API Keys ---
OPENAI_API_KEY = os.getenv("OPENAI_API_KEY")

# --- Admin (single shared secret) ---
ADMIN_USERNAME = os.getenv("ADMIN_USERNAME", "Admin")
ADMIN_PASSWORD = os.getenv("ADMIN_PASSWORD", "Admin@1234")

# --- Base Paths ---
PACKAGE_DIR = os.path.dirname(os.path.abspath(__file__))
PROJ_ROOT = os.path.dirname(PACKAGE_DIR)

# --- Models ---
EMBED_MODEL = os.getenv("EMBED_MODEL", "text-embedding-3-small")
GENERATION_MODEL = os.getenv("GENERATION_MODEL", "gpt-4o-mini")
GENERATION_TEMPERATURE = float(os.getenv("GENERATION_TEMPERATURE", "0.3"))  # low temp for factual answers
OPENAI_TIMEOUT_SECONDS = float(os.getenv("OPENAI_TIMEOUT_SECONDS", "30"))

# --- Chunking ---
CHUNK_SIZE = int(os.getenv("CHUNK_SIZE", "500"))
CHUNK_OVERLAP = int(os.getenv("CHUNK_OVERLAP", "50"))

# --- Retrieval ---
RETRIEVAL_TOP_K = int(os.getenv("RETRIEVAL_TOP_K", "4"))
RETRIEVAL_SCORE_THRESHOLD = float(os.getenv("RETRIEVAL_SCORE_THRESHOLD", "0.45"))

# --- Ingestion pacing ---
EMBED_DELAY_SECONDS = float(os.getenv("EMBED_DELAY_SECONDS", "0.1"))  # gentle on the embedding API
EMBED_MAX_TRIES = int(os.getenv("EMBED_MAX_TRIES", "3"))

# --- Prompt Configuration ---
PROMPT_PATH = os.getenv("PROMPT_PATH", os.path.join(PACKAGE_DIR, "prompts.yml"))

# --- HTTP ---
CORS_ORIGINS = [o.strip() for o in os.getenv("CORS_ORIGINS", "*").split(",") if o.strip()]
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

# --- Fixed user-facing messages ---
NO_KNOWLEDGE_MESSAGE = (
    "I currently have no documents loaded in my knowledge base. "
    "Please ask the Admin to upload some training material."
)
OUT_OF_SCOPE_MESSAGE = (
    "Sorry, I am not trained on this topic yet. "
    "Please contact our support team for further assistance."
)
APOLOGY_MESSAGE = "I apologize, I couldn't generate a response."
CHAT_FAILURE_MESSAGE = "I encountered an error connecting to my brain. Please try again."
CONFIG_MISSING_MESSAGE = "System Error: Admin has not configured the API Key yet."
