"""
FILE: taskbeacon/core/constants.py
PURPOSE: Constants used throughout the application
EXPORTS:
  - Tag constants: BEACON_TAG_PREFIX, WASTE_TAG
  - Focus constants: NO_PROJECT, DEFAULT_QUOTA, PENDING_FILTER
  - Flow phases: PHASE_LOADING, PHASE_FETCHING, PHASE_PREVIEW, PHASE_EDITING,
    PHASE_COMMITTING, PHASE_DONE, PHASE_ERROR
  - Field names: ADD_FIELDS, ENRICH_FIELDS
  - LLM defaults: DEFAULT_PROVIDER, DEFAULT_MODEL, DEFAULT_API_KEY_ENV, DEFAULT_OLLAMA_URL
DEPENDENCIES:
  - None (stdlib only)
NOTES:
  - Centralized constants to avoid magic strings
  - Single source of truth for field order in both edit screens
"""

# Tag constants
BEACON_TAG_PREFIX = "b."
WASTE_TAG = "waste"

# Focus view
NO_PROJECT = "(no project)"
DEFAULT_QUOTA = 2
PENDING_FILTER = "status:pending"

# Flow phases
PHASE_LOADING = "loading"
PHASE_FETCHING = "fetching"
PHASE_PREVIEW = "preview"
PHASE_EDITING = "editing"
PHASE_COMMITTING = "committing"
PHASE_DONE = "done"
PHASE_ERROR = "error"

# Editable fields, in screen order
FIELD_DESCRIPTION = "Description"
FIELD_BEACONS = "Beacons"
FIELD_DIRECTIONS = "Directions"
FIELD_PROJECT = "Project"
FIELD_PRIORITY = "Priority"
FIELD_DUE = "Due"
FIELD_SCHEDULED = "Scheduled"
FIELD_EFFORT = "Effort"
FIELD_IMPACT = "Impact"
FIELD_ESTIMATE = "Estimate"
FIELD_FUN = "Fun"
FIELD_BLOCKS = "Blocks"

ADD_FIELDS = (
    FIELD_DESCRIPTION,
    FIELD_BEACONS,
    FIELD_DIRECTIONS,
    FIELD_PROJECT,
    FIELD_PRIORITY,
    FIELD_DUE,
    FIELD_SCHEDULED,
    FIELD_EFFORT,
    FIELD_IMPACT,
    FIELD_ESTIMATE,
    FIELD_FUN,
    FIELD_BLOCKS,
)

# Batch flow never edits the description (it may come from an external sync)
ENRICH_FIELDS = ADD_FIELDS[1:]

# Attribute scales, shown as hints in previews
EFFORT_HINT = "E=Easy N=Normal D=Difficult"
IMPACT_HINT = "H=High M=Medium L=Low"
FUN_HINT = "H=Fun M=Neutral L=Boring"

# LLM defaults
PROVIDER_ANTHROPIC = "anthropic"
PROVIDER_OPENAI = "openai"
PROVIDER_OLLAMA = "ollama"
PROVIDER_CLAUDE_CLI = "claude-cli"
DEFAULT_PROVIDER = PROVIDER_ANTHROPIC
DEFAULT_MODEL = "claude-sonnet-4-5-20250929"
DEFAULT_API_KEY_ENV = "ANTHROPIC_API_KEY"
DEFAULT_OLLAMA_URL = "http://localhost:11434"
REQUEST_TIMEOUT = 60.0

# Per-provider defaults when the config leaves model / api_key_env empty
PROVIDER_MODELS = {
    PROVIDER_ANTHROPIC: DEFAULT_MODEL,
    PROVIDER_OPENAI: "gpt-4o",
    PROVIDER_OLLAMA: "llama3.2",
    PROVIDER_CLAUDE_CLI: "haiku",
}
PROVIDER_KEY_ENVS = {
    PROVIDER_ANTHROPIC: DEFAULT_API_KEY_ENV,
    PROVIDER_OPENAI: "OPENAI_API_KEY",
}
