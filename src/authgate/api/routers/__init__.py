"""
authgate.api.routers

Router modules for the HTTP transport.
"""

# Package marker.
