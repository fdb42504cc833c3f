from __future__ import annotations

import math
import re
from datetime import date
from typing import Any, Optional

from ..core.exceptions import ValidationError
from .datetime_utils import parse_iso_date

_ISO_DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")


def require_present(value: Any, field_name: str) -> Any:
    if value is None or (isinstance(value, str) and not value.strip()):
        raise ValidationError(f"{field_name} is required")
    return value


def require_int(value: Any, field_name: str) -> int:
    require_present(value, field_name)
    if isinstance(value, bool):
        raise ValidationError(f"{field_name} must be an integer")
    # int() would truncate 2.7 to 2.
    if isinstance(value, float) and not value.is_integer():
        raise ValidationError(f"{field_name} must be an integer")
    try:
        return int(value)
    except (TypeError, ValueError, OverflowError):
        raise ValidationError(f"{field_name} must be an integer") from None


def require_coordinate(value: Any, field_name: str, *, limit: float) -> float:
    """Coerce a latitude/longitude to float and check it lies in [-limit, limit]."""
    require_present(value, field_name)
    if isinstance(value, bool):
        raise ValidationError(f"{field_name} must be a number")
    try:
        number = float(value)
    except (TypeError, ValueError, OverflowError):
        raise ValidationError(f"{field_name} must be a number") from None
    if not math.isfinite(number) or not -limit <= number <= limit:
        raise ValidationError(f"{field_name} must be between {-limit:g} and {limit:g}")
    return number


def require_iso_date(value: Any, field_name: str) -> date:
    """Accept a date or a strict YYYY-MM-DD string naming a real calendar day."""
    if isinstance(value, date):
        return value
    if not isinstance(value, str) or not _ISO_DATE_RE.match(value):
        raise ValidationError(f"Valid {field_name} (YYYY-MM-DD) is required")
    try:
        return parse_iso_date(value)
    except ValueError:
        raise ValidationError(f"Valid {field_name} (YYYY-MM-DD) is required") from None


def optional_iso_date(value: Any, field_name: str) -> Optional[date]:
    if value is None or value == "":
        return None
    return require_iso_date(value, field_name)
