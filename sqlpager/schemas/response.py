from typing import Generic

from pydantic import BaseModel, Field
from typing_extensions import Annotated

from sqlpager.schemas.generic_typing import GenericSQLModelType


class MetadataModel(BaseModel):  # type: ignore[misc]
    page: Annotated[int, Field(ge=1)]
    per_page: Annotated[int, Field(ge=1)]
    total: Annotated[int, Field(ge=0)]
    pages: Annotated[int, Field(ge=0)]
    next_page: int | None = None
    prev_page: int | None = None
    is_first_page: bool = True
    is_last_page: bool = False


class PaginatedResponseModel(BaseModel, Generic[GenericSQLModelType]):  # type: ignore[misc]
    items: list[GenericSQLModelType]
    meta: MetadataModel
