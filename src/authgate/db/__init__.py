"""
authgate.db

Persistence package (SQLAlchemy async).

Responsibilities:
- Provide the ORM model, engine/session setup, and a `UserStore` implementation.
"""

# Package marker.


# --- Module Notes -----------------------------------------------------------
# Nothing in `authgate.auth` imports from here; the engine only sees the `UserStore`
# interface, so this package can be swapped for any other backend.
