"""
DevConnector Backend: Declarative Input Validation
===================================================

What:  Small constraint helpers used by the request schemas, plus the
       translation of Pydantic errors into the API error envelope.
Why:   Every field constraint carries its own user-facing message
       ("Name is required"), and a failed request must list every failing
       field before any handler code runs.
How:   Request schemas declare fields with `validate_default=True` and call
       these helpers from `field_validator(..., mode="before")`. The helpers
       raise `PydanticCustomError`, whose message Pydantic reports verbatim.
       FastAPI collects all of them into one `RequestValidationError`, which
       main.py answers with 400 and `format_request_errors()` output.

Example:
    class PostRequest(BaseModel):
        text: Optional[str] = Field(default=None, validate_default=True)

        @field_validator("text", mode="before")
        @classmethod
        def _text_required(cls, value):
            return require(value, "Text is required")
"""

from typing import Any, Callable, Dict, Iterable, List, Optional, Sequence, Type, get_type_hints

from email_validator import EmailNotValidError, validate_email
from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError
from pydantic_core import PydanticCustomError

# Pydantic error locations start with where the value came from
_LOCATION_ROOTS = {"body", "query", "path", "header", "cookie"}


def is_empty(value: Any) -> bool:
    """None, blank strings and empty collections count as empty."""
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    if isinstance(value, (list, tuple, dict)):
        return len(value) == 0
    return False


def require(value: Any, message: str) -> Any:
    """Presence constraint."""
    if is_empty(value):
        raise PydanticCustomError("required", message)
    return value


def require_email(value: Any, message: str) -> str:
    """Email format constraint; deliverability is not checked."""
    if not isinstance(value, str) or is_empty(value):
        raise PydanticCustomError("email", message)
    try:
        validate_email(value.strip(), check_deliverability=False)
    except EmailNotValidError:
        raise PydanticCustomError("email", message)
    return value.strip()


def require_min_length(value: Any, length: int, message: str) -> str:
    """Minimum string length constraint."""
    if not isinstance(value, str) or len(value) < length:
        raise PydanticCustomError("min_length", message)
    return value


def split_skills(value: Any) -> List[str]:
    """
    Normalize skills input into an ordered list of trimmed, non-blank names.

    Accepts the comma-separated form the web form sends ("Python, Go") or
    an already split list.
    """
    if isinstance(value, str):
        parts: Iterable[Any] = value.split(",")
    elif isinstance(value, (list, tuple)):
        parts = value
    else:
        return []
    return [str(part).strip() for part in parts if str(part).strip()]


def format_request_errors(errors: Sequence[Dict[str, Any]]) -> List[Dict[str, str]]:
    """
    Convert Pydantic/FastAPI error dicts into `{"msg", "param"}` entries.

    ("body", "experience", 0, "title") → param "experience.title"
    ("body",) (missing or malformed body) → no param
    """
    formatted = []
    for error in errors:
        loc = list(error.get("loc", ()))
        if loc and loc[0] in _LOCATION_ROOTS:
            loc = loc[1:]
        names = [part for part in loc if isinstance(part, str)]
        entry = {"msg": error.get("msg", "Invalid value")}
        if names:
            entry["param"] = ".".join(names)
        formatted.append(entry)
    return formatted


def body_model(endpoint: Optional[Callable[..., Any]]) -> Optional[Type[BaseModel]]:
    """The Pydantic model a route handler takes as its request body, if any."""
    if endpoint is None:
        return None
    for name, hint in get_type_hints(endpoint).items():
        if name != "return" and isinstance(hint, type) and issubclass(hint, BaseModel):
            return hint
    return None


def missing_body_errors(
    errors: Sequence[Dict[str, Any]],
    endpoint: Optional[Callable[..., Any]],
) -> Sequence[Dict[str, Any]]:
    """
    Replace a bare "body missing" error with the body model's field errors.

    A request sent without any body fails at ("body",) before the field
    validators run. Validating `{}` against the route's model yields the
    per-field messages ("Text is required", ...) a form with every field
    left empty would get. Any other error list is returned unchanged.
    """
    if len(errors) != 1:
        return errors
    error = errors[0]
    if tuple(error.get("loc", ())) != ("body",) or error.get("type") != "missing":
        return errors

    model = body_model(endpoint)
    if model is None:
        return errors
    try:
        model.model_validate({})
    except PydanticValidationError as e:
        return e.errors()
    return errors
