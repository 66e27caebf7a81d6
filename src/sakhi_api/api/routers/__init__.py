"""
sakhi_api.api.routers

Router package; each module owns one resource area under `/api`.
"""

# Package marker.
