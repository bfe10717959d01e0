"""JSON conversion for settings models"""

from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from typing import Any, Type

import simplejson
from pydantic import ValidationError
from pydantic_core import PydanticSerializationError

from ..exceptions import DecodingError, EncodingError
from ..schemas.settings import S, SettingsModel


def _encode_value(value: Any) -> Any:
    """simplejson.dumps hook for values the encoder does not know"""
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if isinstance(value, Enum):
        return value.value
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


def _check_finite(value: Any):
    """Reject NaN and infinite decimals, which have no JSON number form"""
    if isinstance(value, Decimal):
        if not value.is_finite():
            raise ValueError(f"{value} is not a finite number")
    elif isinstance(value, dict):
        for item in value.values():
            _check_finite(item)
    elif isinstance(value, (list, tuple)):
        for item in value:
            _check_finite(item)


class SettingsSerializer:
    """Convert settings models to and from their stored JSON text"""

    def serialize(self, model: SettingsModel) -> str:
        """
        Encode every set field of the model using its JSON alias.

        Output is deterministic: keys are sorted and None fields are omitted.
        Decimals are written with all of their digits.
        """
        try:
            data = model.model_dump(mode="python", by_alias=True, exclude_none=True)
            _check_finite(data)
            return simplejson.dumps(
                data,
                default=_encode_value,
                use_decimal=True,
                sort_keys=True,
                allow_nan=False,
                separators=(",", ":"),
            )
        except (TypeError, ValueError, PydanticSerializationError) as e:
            raise EncodingError(
                f"Cannot encode {type(model).__name__}: {e}"
            ) from e

    def deserialize(self, text: str, settings_type: Type[S]) -> S:
        """Decode stored JSON into settings_type, ignoring unknown keys"""
        try:
            data = simplejson.loads(text, use_decimal=True)
        except (TypeError, ValueError) as e:
            raise DecodingError(
                f"Stored JSON for {settings_type.__name__} is not well-formed: {e}"
            ) from e

        if not isinstance(data, dict):
            raise DecodingError(
                f"Stored JSON for {settings_type.__name__} is not an object"
            )

        try:
            return settings_type.model_validate(data)
        except ValidationError as e:
            raise DecodingError(
                f"Stored JSON does not match {settings_type.__name__}: {e}"
            ) from e
