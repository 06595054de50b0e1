import os
from dotenv import load_dotenv

# Load environment variables (only in development)
# In containers, environment variables are set directly
if os.getenv("ENVIRONMENT") != "production":
    load_dotenv()

# Characters used by random_string (64 symbols)
RANDOM_STRING_SOURCE = "abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ1234567890_+"

# Length of the random part of a renamed upload
RENAMED_FILE_LENGTH = 25

# Number of leading bytes inspected when sniffing an upload's content type
SNIFF_LENGTH = 512

# Upload limits
DEFAULT_MAX_FILE_SIZE = 1024 * 1024 * 1024
DEFAULT_ALLOWED_FILE_TYPES = [
    "image/jpeg",
    "image/jpg",
    "image/png",
    "image/gif",
    "application/pdf",
]

# JSON body limit, kept at its historical value (not 10 MiB)
DEFAULT_MAX_JSON_SIZE = 1024 * 10243

# Environment overrides (0 / empty means "use the default")
MAX_FILE_SIZE = int(os.getenv("TOOLKIT_MAX_FILE_SIZE", "0"))
ALLOWED_FILE_TYPES = [
    t.strip() for t in os.getenv("TOOLKIT_ALLOWED_FILE_TYPES", "").split(",") if t.strip()
]
MAX_JSON_SIZE = int(os.getenv("TOOLKIT_MAX_JSON_SIZE", "0"))
ALLOW_UNKNOWN_FIELDS = os.getenv("TOOLKIT_ALLOW_UNKNOWN_FIELDS", "false").lower() == "true"
