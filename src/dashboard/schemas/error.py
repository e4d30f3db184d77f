"""Error response schema.

The platform API reports failures as a flat JSON object whose ``message``
field is meant for the user. The fake backend builds these in its exception
handlers, and the API services read ``message`` back out of them.
"""

from pydantic import BaseModel


class ErrorResponse(BaseModel):
    """Error body with a machine-readable code and a human-readable message."""

    code: str
    message: str
