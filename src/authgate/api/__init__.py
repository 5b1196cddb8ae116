"""
authgate.api

HTTP transport for the authentication engine.

Responsibilities:
- FastAPI app factory and router modules.
- Mapping of engine errors onto status codes.
"""

# Package marker.


# --- Module Notes -----------------------------------------------------------
# The API layer stays thin: request validation + delegation to `Authenticator`.
