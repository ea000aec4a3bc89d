"""
Name: ASGI Entrypoint (campusportal.main)

Responsibilities:
  - Re-export the FastAPI app for ASGI servers and tooling

Notes/Constraints:
  - No configuration or IO lives here
  - uvicorn is pointed at campusportal.main:app; changing this path breaks
    deployments
"""

from campusportal.api.main import app

__all__ = ["app"]
