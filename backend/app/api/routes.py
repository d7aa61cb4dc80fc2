"""HTTP routes for the Flask API."""

import logging
from http import HTTPStatus
from typing import Any, Dict

from flask import Blueprint, current_app, jsonify, request
from pydantic import ValidationError

from backend.core.calculator import RetirementCalculator
from backend.domain.models import InputValidationError
from backend.schemas.retirement import (
    RetirementCalculatorInput,
    RetirementCalculatorResponse,
)

logger = logging.getLogger(__name__)

api_bp = Blueprint("api", __name__)


@api_bp.errorhandler(ValidationError)
def _handle_validation_error(exc: ValidationError):
    """Convert Pydantic validation errors into JSON responses."""
    return jsonify({"detail": exc.errors(include_url=False)}), HTTPStatus.UNPROCESSABLE_ENTITY


@api_bp.errorhandler(InputValidationError)
def _handle_input_validation_error(exc: InputValidationError):
    logger.info("rejected calculator input: %s", ", ".join(sorted(exc.errors)))
    return jsonify({"errors": exc.errors}), HTTPStatus.BAD_REQUEST


@api_bp.get("/ping")
def ping() -> Any:
    """Health-check endpoint."""
    return jsonify({"message": "pong"})


@api_bp.post("/calc/retirement")
def retirement() -> Any:
    """Projected savings at retirement and the income they support."""
    raw_payload: Dict[str, Any] = request.get_json(force=True, silent=False)
    payload = RetirementCalculatorInput.model_validate(raw_payload)
    calculator: RetirementCalculator = current_app.extensions["retirement_calculator"]
    results = calculator.calculate(payload)
    response = RetirementCalculatorResponse(results=results)
    return jsonify(response.model_dump(by_alias=True))
