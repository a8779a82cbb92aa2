from __future__ import annotations

import logging
from typing import Any, Dict, Optional, Tuple

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from app.planner.errors import ConfigurationError, DomainArgumentError, InputValidationError

logger = logging.getLogger(__name__)

FALLBACK_ERROR = {"error": "internal_error", "message": "Internal server error"}

FIELD_ERROR_CODES = {
    "amount": "invalid_amount",
    "investmentAmount": "invalid_amount",
    "riskScore": "invalid_risk_score",
    "monthlyContribution": "invalid_monthly_contribution",
    "expectedReturn": "invalid_expected_return",
    "timeHorizon": "invalid_time_horizon",
    "riskLevel": "invalid_risk_level",
    "timeline": "invalid_timeline",
    "preferredSectors": "invalid_preferred_sectors",
}

# Raised from model validators with PydanticCustomError; the type is the code.
CUSTOM_ERROR_CODES = {"incomplete_monthly_plan"}


def safe_json_response(status_code: int, payload: Dict[str, Any]) -> JSONResponse:
    try:
        return JSONResponse(status_code=status_code, content=payload)
    except (TypeError, ValueError):
        logger.exception("Failed to render error payload")
        return JSONResponse(status_code=500, content=FALLBACK_ERROR)


def _error_field(err: Dict[str, Any]) -> Optional[str]:
    for part in err.get("loc") or ():
        if isinstance(part, str) and part != "body":
            return part
    return None


def describe_validation_error(exc: RequestValidationError) -> Tuple[str, str]:
    errors = exc.errors()
    if not errors:
        return "invalid_request", "Invalid request"

    err = errors[0]
    err_type = err.get("type")
    if err_type in CUSTOM_ERROR_CODES:
        return err_type, str(err.get("msg"))

    field = _error_field(err)
    if field is None:
        if err_type == "missing":
            return "invalid_request", "Request body is required"
        return "invalid_request", str(err.get("msg") or "Invalid request")

    code = FIELD_ERROR_CODES.get(field, "invalid_request")
    if err_type == "missing":
        return code, f"{field} is required"
    return code, f"{field}: {err.get('msg')}"


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    code, message = describe_validation_error(exc)
    logger.warning(f"{request.method} {request.url.path} rejected: {code} ({message})")
    return safe_json_response(400, {"error": code, "message": message})


async def input_validation_handler(request: Request, exc: InputValidationError) -> JSONResponse:
    logger.warning(f"{request.method} {request.url.path} rejected: {exc.code} ({exc.message})")
    return safe_json_response(400, {"error": exc.code, "message": exc.message})


async def configuration_error_handler(request: Request, exc: ConfigurationError) -> JSONResponse:
    logger.exception(f"{request.method} {request.url.path} failed: configuration error")
    return safe_json_response(500, {"error": "configuration_error", "message": str(exc)})


async def domain_argument_handler(request: Request, exc: DomainArgumentError) -> JSONResponse:
    logger.exception(f"{request.method} {request.url.path} failed: {exc.argument} out of domain")
    return safe_json_response(500, {"error": "domain_argument_error", "message": str(exc)})


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception(f"Unexpected error on {request.method} {request.url.path}")
    return JSONResponse(status_code=500, content=FALLBACK_ERROR)


def install_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(InputValidationError, input_validation_handler)
    app.add_exception_handler(ConfigurationError, configuration_error_handler)
    app.add_exception_handler(DomainArgumentError, domain_argument_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
