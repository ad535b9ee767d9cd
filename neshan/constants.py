"""
Neshan API Constants

This module contains constants for the Neshan Maps web service API.
"""

from typing import Final

VERSION: Final[str] = "0.1.0"

# API Configuration
API_BASE_URL: Final[str] = "https://api.neshan.org"
USER_AGENT: Final[str] = f"neshan-py/{VERSION}"

# API Endpoints
ENDPOINT_DIRECTION: Final[str] = "/v3/direction"
ENDPOINT_REVERSE: Final[str] = "/v2/reverse"

# Authentication
API_KEY_HEADER: Final[str] = "Api-Key"

# Content Types
CONTENT_TYPE_JSON: Final[str] = "application/json"
