"""Constants for the Recipe Importer package."""

# Environment variable names (loaded through python-dotenv)
CONF_API_KEY = "LANGEXTRACT_API_KEY"
CONF_MODEL = "RECIPE_IMPORTER_MODEL"
CONF_VISION_MODEL = "RECIPE_IMPORTER_VISION_MODEL"
CONF_TIMEOUT = "RECIPE_IMPORTER_TIMEOUT"
CONF_USER_AGENT = "RECIPE_IMPORTER_USER_AGENT"
CONF_USE_AI = "RECIPE_IMPORTER_USE_AI"
CONF_CONVERT_UNITS = "RECIPE_IMPORTER_CONVERT_UNITS"

# Default values
DEFAULT_MODEL = "gemini-2.5-flash-lite"
DEFAULT_VISION_MODEL = "gemini-2.5-flash"
DEFAULT_TIMEOUT = 10
DEFAULT_MAX_TEXT_LENGTH = 15000
DEFAULT_MIN_TEXT_LENGTH = 100
DEFAULT_MAX_RESPONSE_SIZE = 10 * 1024 * 1024
DEFAULT_MAX_REDIRECTS = 5
DEFAULT_CONFIDENCE_THRESHOLD = 0.7

# Available models
AVAILABLE_MODELS = [
    "gemini-2.5-flash-lite",
    "gemini-2.5-flash",
    "gemini-2.5-pro",
]

UNTITLED_RECIPE = "Untitled Recipe"

# Extraction sources
SOURCE_SCHEMA_ORG = "schema.org"
SOURCE_AI = "ai"
SOURCE_MANUAL = "manual"

# Confidence scoring
CONFIDENCE_BASE_SCHEMA_ORG = 0.5
CONFIDENCE_BASE_AI = 0.6
CONFIDENCE_TITLE = 0.1
CONFIDENCE_INGREDIENTS = 0.15
CONFIDENCE_INSTRUCTIONS = 0.15
CONFIDENCE_TIME = 0.05
CONFIDENCE_SERVINGS = 0.05

# Error messages
ERROR_NO_SCHEMA_ORG = "No schema.org Recipe data found in HTML"
ERROR_INVALID_URL = "Invalid URL format"
ERROR_UNSUPPORTED_SCHEME = "Only HTTP and HTTPS URLs are supported"
ERROR_INTERNAL_ADDRESS = "Cannot access internal IP addresses"
ERROR_TIMEOUT = "Request timed out"
ERROR_AI_DISABLED = "AI features are not enabled"

# Supported image formats for visual parsing
VISUAL_PARSER_SUPPORTED_FORMATS = (
    "image/jpeg",
    "image/png",
    "image/heic",
    "image/heif",
    "image/tiff",
)
