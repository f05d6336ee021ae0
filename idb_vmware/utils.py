from typing import Any


def safe_json_parse(response: Any):
    """Safely parse a JSON response, returning the body or a text stand-in."""
    try:
        return response.json()
    except ValueError:
        full_text = response.text if hasattr(response, "text") else str(response.content)
        # Truncated for logging purposes only
        return {"_raw_response": full_text[:2000], "_parse_error": "Not valid JSON"}
