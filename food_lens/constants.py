"""All magic values live here — no inline literals anywhere else."""

# Vision providers and their default models
PROVIDER_GEMINI = "gemini"
PROVIDER_CLAUDE = "claude"
PROVIDER_OPENAI = "openai"
DEFAULT_PROVIDER = PROVIDER_GEMINI

GEMINI_VISION_MODEL = "gemini-2.5-flash"
CLAUDE_VISION_MODEL = "claude-sonnet-4-5-20250929"
OPENAI_VISION_MODEL = "gpt-4o"
DEFAULT_MODELS = {
    PROVIDER_GEMINI: GEMINI_VISION_MODEL,
    PROVIDER_CLAUDE: CLAUDE_VISION_MODEL,
    PROVIDER_OPENAI: OPENAI_VISION_MODEL,
}
CLAUDE_MAX_TOKENS = 1024

# Retry policy
DEFAULT_MAX_RETRIES = 2
DEFAULT_RETRY_DELAY_MS = 2000

# Outbound image encoding (no content sniffing)
IMAGE_MIME_TYPE = "image/jpeg"
FILE_URI_SCHEME = "file"

# Result defaults
DEFAULT_HEALTHIER_ALTERNATIVE = "No specific alternative suggested"
DEFAULT_MEAL_TYPE = "Unknown"
DEFAULT_CONFIDENCE = "medium"
CONFIDENCE_TIERS = ("high", "medium", "low")
REQUIRED_NUTRIENTS = ("calories", "protein", "carbs")
TRUTHY_STRINGS = ("true", "yes", "1")

# Validator failure reasons
REASON_NO_JSON = "no_json"
REASON_INVALID_JSON = "invalid_json"
MSG_NO_JSON_PATTERN = "No JSON pattern found in the AI response"
MSG_INVALID_JSON = "Could not extract valid JSON from the AI response"
MSG_MISSING_FIELD = "Missing required field: %s"
MSG_MISSING_NUTRIENTS = "Missing required nutrition info: %s"

# Loader errors
MSG_IMAGE_REQUIRED = "Image reference is required"
MSG_IMAGE_INVALID = "Image reference is not a usable path: %s"
MSG_IMAGE_NOT_FOUND = "Image file not found: %s"
MSG_IMAGE_READ_FAILED = "Image file could not be read: %s"

# Backend errors
MSG_API_KEY_REJECTED = "API key rejected by %s: %s"

# Caller-facing messages
MSG_USER_AUTH = "Authentication failed: Please check your API key configuration"
MSG_USER_IMAGE_ACCESS = "Image access error: The selected image could not be loaded"
MSG_USER_ANALYSIS = "Analysis failed: Unable to process the image content"
MSG_USER_GENERIC = "Food analysis failed: %s"
MSG_UNKNOWN_ERROR = "Unknown error occurred"
KEYWORD_API_KEY = "api key"
KEYWORD_FILE_NOT_FOUND = "file not found"
KEYWORD_VALID_JSON = "valid json"

# Log messages
MSG_ATTEMPT_FAILED = "Attempt %d/%d failed, retrying in %dms: %s"
MSG_ATTEMPT_GAVE_UP = "Attempt %d/%d failed, giving up: %s"
MSG_NOT_RETRYABLE = "Attempt %d failed with a non-retryable error: %s"
MSG_CALLING_MODEL = "Calling %s (attempt %d/%d)…"
MSG_IMAGE_LOADED = "Loaded image %s (%d bytes)"
MSG_ANALYSIS_OK = "Analyzed image: %s (confidence %s)"
MSG_ANALYSIS_FAILED = "Error in food image analysis: %s"
