"""
Tests for the exception hierarchy.
"""

from vectorgate.core.exceptions.custom_exceptions import (
    CollectionExistsError,
    ConfigurationError,
    DecodeError,
    EngineError,
    InvalidRequestError,
    NotFoundError,
    VectorGateError,
)


def test_defaults():
    error = VectorGateError("boom")
    assert error.message == "boom"
    assert error.error_code == "VectorGateError"
    assert error.details == {}
    assert error.status_code == 500


def test_status_codes():
    assert InvalidRequestError("bad").status_code == 400
    assert NotFoundError("missing").status_code == 404
    assert EngineError("down").status_code == 500
    assert ConfigurationError("bad config").status_code == 500
    assert DecodeError("drift").status_code == 500


def test_response_shape():
    error = InvalidRequestError("Batch cannot be empty", error_code="BATCH_EMPTY")
    assert error.to_response() == {"error": "Batch cannot be empty", "status": 400}


def test_engine_error_hides_details():
    error = EngineError("Qdrant upsert failed: connection refused", details={"url": "x"})
    assert error.public_message == "Database operation failed"
    assert error.to_response() == {"error": "Database operation failed", "status": 500}
    assert "connection refused" in str(error)


def test_collection_exists_is_engine_error():
    assert issubclass(CollectionExistsError, EngineError)
    assert issubclass(EngineError, VectorGateError)
