import logging
import math
import re
from typing import Annotated, Any, Dict, Optional, Union

from pydantic import BaseModel, ConfigDict, StrictBool, StrictFloat, StrictInt, StringConstraints, ValidationError, field_validator

from .errors import ProductValidationError

logger = logging.getLogger(__name__)

# Payload schemas and the checks that run before the store is touched.

NonEmptyStr = Annotated[str, StringConstraints(strict=True, min_length=1)]
Price = Union[StrictInt, StrictFloat]
_LEADING_INT = re.compile(r"\s*[+-]?\d+")


def _check_price(v):
    # zero (and NaN) count as a missing price
    if not v or math.isnan(v):
        raise ValueError("price must be a non-zero number")
    return v


class ProductIn(BaseModel):
    model_config = ConfigDict(extra="ignore")

    name: NonEmptyStr
    description: NonEmptyStr
    price: Price
    category: NonEmptyStr
    inStock: StrictBool

    @field_validator("price")
    @classmethod
    def price_present(cls, v):
        return _check_price(v)


class ProductUpdate(BaseModel):
    model_config = ConfigDict(extra="ignore")

    name: Optional[NonEmptyStr] = None
    description: Optional[NonEmptyStr] = None
    price: Optional[Price] = None
    category: Optional[NonEmptyStr] = None
    inStock: Optional[StrictBool] = None

    @field_validator("price")
    @classmethod
    def price_present(cls, v):
        if v is None:
            return v
        return _check_price(v)


def validate_create(payload: Any) -> ProductIn:
    if not isinstance(payload, dict):
        raise ProductValidationError()
    try:
        return ProductIn.model_validate(payload)
    except ValidationError as e:
        logger.debug(f"Create payload rejected: {e.errors()}")
        raise ProductValidationError() from e


def validate_update(payload: Any) -> Dict[str, Any]:
    """Return only the product fields present in ``payload``.

    ``id`` and unknown keys are dropped, and a ``null`` value leaves the
    stored field unchanged. No body (or a body that was not sent as JSON)
    is an empty update.
    """
    if payload is None or isinstance(payload, (bytes, bytearray)):
        payload = {}
    if not isinstance(payload, dict):
        raise ProductValidationError()
    try:
        update = ProductUpdate.model_validate(payload)
    except ValidationError as e:
        logger.debug(f"Update payload rejected: {e.errors()}")
        raise ProductValidationError() from e
    return update.model_dump(exclude_none=True)


def parse_int(raw: Optional[str]) -> Optional[int]:
    """Read the leading integer of a query value ("2.9" -> 2, "1abc" -> 1).

    Anything without a leading integer counts as absent.
    """
    if raw is None:
        return None
    m = _LEADING_INT.match(raw)
    return int(m.group(0)) if m else None
