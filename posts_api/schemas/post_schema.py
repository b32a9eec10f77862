from typing import Annotated

from pydantic import (
    AfterValidator,
    BaseModel,
    ConfigDict,
    StrictBool,
    constr,
    field_validator,
)


def _not_blank(value: str) -> str:
    if not value.strip():
        raise ValueError("must not be blank")
    return value


NonBlankStr = Annotated[str, AfterValidator(_not_blank)]


class CreatePost(BaseModel):
    author: NonBlankStr
    title: NonBlankStr
    content: constr(min_length=1)
    published: StrictBool = False

    model_config = ConfigDict(extra="ignore")

    @field_validator("published", mode="before")
    @classmethod
    def null_as_unpublished(cls, value):
        return False if value is None else value


class UpdatePost(BaseModel):
    author: NonBlankStr | None = None
    title: NonBlankStr | None = None
    content: constr(min_length=1) | None = None
    published: StrictBool | None = None

    model_config = ConfigDict(extra="ignore")
