from datetime import datetime
from typing import Annotated, Optional

from pydantic import AfterValidator, BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from hackhub.core.time_utils import ensure_utc


class CamelModel(BaseModel):
    """Accepts and emits camelCase keys; snake_case also accepted on input."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


UtcDatetime = Annotated[datetime, AfterValidator(ensure_utc)]
OptionalUtcDatetime = Optional[UtcDatetime]
