"""Widget config parser: parse-don't-trust boundary for personalization payloads."""

import json
import logging
from typing import Any

from pydantic import ValidationError

from waypoint.schemas.widget import WidgetDirective

logger = logging.getLogger(__name__)


def parse_widget_config(raw: Any) -> WidgetDirective | None:
    """Normalize a raw personalization payload into a directive.

    Accepts a mapping, a JSON-encoded string (or bytes), or None. Anything that
    does not decode to a structurally valid directive yields None: the
    personalization service may legitimately answer with a plain
    acknowledgement string instead of a directive.
    """
    if raw is None:
        return None

    if isinstance(raw, WidgetDirective):
        return raw

    if isinstance(raw, (bytes, bytearray)):
        try:
            raw = raw.decode("utf-8")
        except UnicodeDecodeError:
            logger.info("Widget payload is not valid UTF-8; no directive")
            return None

    if isinstance(raw, str):
        text = raw.strip()
        if not text:
            return None
        try:
            raw = json.loads(text)
        except (ValueError, RecursionError):
            logger.info(f"No widget directive (plain response): {text[:80]!r}")
            return None

    if not isinstance(raw, dict):
        logger.info(f"Widget payload is a {type(raw).__name__}, not an object; no directive")
        return None

    try:
        return WidgetDirective.model_validate(raw)
    except ValidationError as e:
        fields = sorted({".".join(str(p) for p in err["loc"]) for err in e.errors()})
        logger.info(f"Malformed widget directive, invalid fields: {', '.join(fields)}")
        return None
    except Exception as e:
        # Validators run arbitrary coercion; nothing from a payload may escape this boundary.
        logger.warning(f"Unexpected error parsing widget directive: {e}")
        return None
