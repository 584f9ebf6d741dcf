from fastapi import HTTPException

from blog_api.config import settings
from blog_api.core.exceptions import (
    BulkOperationError,
    ConflictError,
    InvalidInputError,
    NotFoundError,
    ServiceError,
    to_http_exception,
)


def test_service_errors_map_to_status_codes():
    assert to_http_exception(NotFoundError("Post with ID 1 not found"), "x").status_code == 404
    assert to_http_exception(ConflictError("taken"), "x").status_code == 409
    assert to_http_exception(InvalidInputError("bad"), "x").status_code == 400

    passthrough = HTTPException(status_code=413, detail="too big")
    assert to_http_exception(passthrough, "x") is passthrough


def test_internal_error_body_outside_production(monkeypatch):
    monkeypatch.setattr(settings, "ENVIRONMENT", "development")

    exc = to_http_exception(ServiceError("Failed to create post: boom"), "Failed to create post")

    assert exc.status_code == 500
    assert exc.detail["message"] == "Failed to create post"
    assert exc.detail["error"] == "Failed to create post: boom"
    assert "details" in exc.detail


def test_internal_error_body_hides_raw_error_in_production(monkeypatch):
    monkeypatch.setattr(settings, "ENVIRONMENT", "production")

    exc = to_http_exception(RuntimeError("password=hunter2"), "Failed to fetch posts")

    assert exc.status_code == 500
    assert exc.detail == {"message": "Failed to fetch posts", "error": "Internal server error"}


def test_bulk_error_reports_partial_result(monkeypatch):
    monkeypatch.setattr(settings, "ENVIRONMENT", "production")

    exc = to_http_exception(
        BulkOperationError("Failed to approve comments: timeout", succeeded=["a"], failed=["b", "c"]),
        "Failed to approve comments",
    )

    assert exc.status_code == 500
    assert exc.detail["succeeded"] == ["a"]
    assert exc.detail["failed"] == ["b", "c"]
