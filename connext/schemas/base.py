from datetime import datetime
from typing import Annotated

from pydantic import AfterValidator, BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from connext.core.utils import as_naive_utc


class CamelModel(BaseModel):
    """Snake_case attributes, camelCase on the wire (the web client's field names)."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
        use_enum_values=True,
    )


# Incoming timestamps are normalised to naive UTC before they reach the database
UTCDateTime = Annotated[datetime, AfterValidator(as_naive_utc)]
