"""Request body validation decorator.

@validate_request inspects the view's signature. Every parameter annotated
with a pydantic model is filled from the request body (JSON, or form data for
HTML forms); other parameters (path variables) pass through unchanged.

    @users_bp.post("/register")
    @validate_request
    def register(data: UserCreate):
        ...
"""

import inspect
from functools import wraps
from typing import get_type_hints

from flask import request
from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from ..exceptions import ValidationError


def _model_params(f) -> dict[str, type[BaseModel]]:
    hints = get_type_hints(f)
    return {
        name: hints[name]
        for name in inspect.signature(f).parameters
        if inspect.isclass(hints.get(name)) and issubclass(hints[name], BaseModel)
    }


def _request_payload():
    payload = request.get_json(silent=True)
    if payload is None and request.form:
        payload = request.form.to_dict()
    return payload


SECRET_FIELDS = {"password"}


def _redact(payload):
    """Mask secret fields before echoing a payload back in error details."""
    if not isinstance(payload, dict):
        return payload
    return {k: ("***" if k in SECRET_FIELDS else v) for k, v in payload.items()}


def _format_errors(e: PydanticValidationError) -> list[dict]:
    return [
        {
            "field": ".".join(str(part) for part in err["loc"]),
            "message": err["msg"],
            "expected_type": err["type"],
        }
        for err in e.errors()
    ]


def validate_request(f):
    """Parse and validate the request body into the view's pydantic parameter.

    Raises:
        ValidationError: If the body is missing or does not match the model
    """
    model_params = _model_params(f)

    @wraps(f)
    def wrapper(*args, **kwargs):
        if not model_params:
            return f(*args, **kwargs)

        payload = _request_payload()
        for name, model in model_params.items():
            if payload is None:
                raise ValidationError(
                    "Request body is required",
                    {"model": model.__name__, "expected": "application/json"}
                )
            try:
                kwargs[name] = model.model_validate(payload)
            except PydanticValidationError as e:
                raise ValidationError(
                    "Invalid request data",
                    {
                        "model": model.__name__,
                        "received": _redact(payload),
                        "errors": _format_errors(e),
                    }
                )
        return f(*args, **kwargs)

    return wrapper
