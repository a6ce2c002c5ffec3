"""
Payload codec between typed records and engine payloads.

The engine stores a flat JSON-like payload next to every vector. Records are
encoded to that payload with the caller's string ID injected under the
reserved ``_point_id`` key, because the engine itself only knows the numeric
ID derived from it.
"""

from typing import Any, Dict, Type, TypeVar

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from vectorgate.core.exceptions.custom_exceptions import DecodeError
from vectorgate.core.logging.logger import get_logger

logger = get_logger(__name__)

POINT_ID_FIELD = "_point_id"

RecordT = TypeVar("RecordT", bound=BaseModel)


def encode(record: BaseModel, original_id: str) -> Dict[str, Any]:
    """
    Serialize ``record`` into an engine payload.

    Optional fields that are unset (``None``) are left out of the payload.
    """
    payload = record.model_dump(exclude_none=True)
    payload[POINT_ID_FIELD] = original_id
    return payload


def decode(payload: Dict[str, Any], record_type: Type[RecordT]) -> RecordT:
    """
    Rebuild a typed record from an engine payload.

    Raises:
        DecodeError: If required fields are missing or have the wrong type
    """
    try:
        return record_type.model_validate(payload)
    except PydanticValidationError as e:
        raise DecodeError(
            f"Stored payload does not match {record_type.__name__}",
            error_code="PAYLOAD_DECODE_ERROR",
            details={
                "point_id": payload.get(POINT_ID_FIELD),
                "errors": e.errors(include_url=False),
            },
        ) from e


def extract_point_id(payload: Dict[str, Any], native_id: Any) -> str:
    """
    Recover the caller's string ID from a payload.

    Falls back to the native ID rendered as a string when the reserved field
    is missing; that point can still be read but no longer addressed by its
    original ID.
    """
    point_id = payload.get(POINT_ID_FIELD)
    if isinstance(point_id, str):
        return point_id

    logger.warning(
        f"Payload has no {POINT_ID_FIELD}, falling back to native id",
        native_id=native_id,
    )
    return str(native_id)
