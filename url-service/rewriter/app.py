"""
Flask adapter for the URL service.
Single endpoint: POST /process-url -> {"processed_url": ...} or {"error": ...}
"""

import json
import logging

from flask import Flask, jsonify, request

from rewriter.core import ENDPOINT_PATH, ROOT_LOGGER
from rewriter.models import (
    ErrorResponse,
    InvalidOperation,
    MalformedRequestBody,
    MissingField,
    ProcessRequest,
    ProcessResponse,
    RequestError,
    TransformError,
    TransformErrorKind,
)
from rewriter import url_utils

logger = logging.getLogger(f"{ROOT_LOGGER}.api")

_json_decoder = json.JSONDecoder()
JSON_WHITESPACE = " \t\n\r"

# Every method is routed here so non-POST requests get a JSON 405 instead of Flask's HTML one
ROUTED_METHODS = ["GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"]

METHOD_NOT_ALLOWED = (405, "Only POST allowed")

REQUEST_ERRORS = {
    MalformedRequestBody: (400, "Invalid JSON input"),
    MissingField: (400, "Missing url or operation field"),
    InvalidOperation: (400, "Invalid operation type"),
}

TRANSFORM_ERRORS = {
    TransformErrorKind.INVALID_URL: (400, "Invalid URL"),
    TransformErrorKind.NOT_BYFOOD_DOMAIN: (400, "URL must be from byfood.com domain for redirection"),
}


def _error(status, message):
    logger.warning(
        f"[API] {request.method} {request.path} -> {status} {message}",
        extra={"context": "api"},
    )
    return jsonify(ErrorResponse(error=message).to_dict()), status


def decode_request(raw_body):
    """
    Decode raw request bytes into a ProcessRequest, raising RequestError subclasses.
    Only the first JSON value is read; anything after it is ignored.
    """
    try:
        text = (raw_body or b"").decode("utf-8").lstrip(JSON_WHITESPACE)
        payload, _ = _json_decoder.raw_decode(text)
    except ValueError as e:
        raise MalformedRequestBody(str(e))
    return ProcessRequest.from_payload(payload)


def process_url():
    if request.method != "POST":
        return _error(*METHOD_NOT_ALLOWED)

    try:
        req = decode_request(request.get_data(cache=False))
    except RequestError as e:
        logger.debug(f"[API] Request rejected: {e}", extra={"context": "api"})
        return _error(*REQUEST_ERRORS[type(e)])

    try:
        processed = url_utils.transform(req.url, req.operation)
    except TransformError as e:
        logger.debug(f"[API] Transform failed for {req.url!r}: {e}", extra={"context": "api"})
        return _error(*TRANSFORM_ERRORS[e.kind])

    logger.info(
        f"[API] {req.operation.value}: {req.url} -> {processed}",
        extra={"context": "api"},
    )
    return jsonify(ProcessResponse(processed_url=processed).to_dict()), 200


def create_app():
    """Build the Flask app with the single /process-url route."""
    app = Flask(__name__)
    app.add_url_rule(ENDPOINT_PATH, "process_url", process_url, methods=ROUTED_METHODS)
    return app
