"""Default upstream agent settings."""

DEFAULT_AGENT_URL = (
    "https://millions-screeching-vultur.mastra.cloud/api/agents/weatherAgent/stream"
)
DEFAULT_AGENT_ID = "weatherAgent"

DEFAULT_AGENT_HEADERS: dict[str, str] = {
    "Accept": "*/*",
    "Accept-Language": "en-GB,en-US;q=0.9,en;q=0.8",
    "Content-Type": "application/json",
    "x-mastra-dev-playground": "true",
}

DEFAULT_CACHE_TTL_MINUTES = 15
