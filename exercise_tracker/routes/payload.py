"""
Exercise Tracker: Request Body Reader
=======================================

What:  Dependency that reads a request body as a flat dict.
How:   JSON bodies (application/json) are decoded as an object; everything
       else is read as a form (urlencoded or multipart). A body that cannot be
       decoded yields an empty dict, so missing fields surface as None.
Who:   POST /api/users and POST /api/users/{_id}/exercises.
"""

import json
import logging
from typing import Any, Dict

from fastapi import Request

logger = logging.getLogger(__name__)


async def read_payload(request: Request) -> Dict[str, Any]:
    content_type = request.headers.get("content-type", "")

    if "application/json" in content_type:
        try:
            body = await request.json()
        except (json.JSONDecodeError, UnicodeDecodeError):
            logger.warning("Malformed JSON body on %s", request.url.path)
            return {}
        return body if isinstance(body, dict) else {}

    form = await request.form()
    return {key: value for key, value in form.items() if isinstance(value, str)}
