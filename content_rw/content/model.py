"""Content document model."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator


class Content(BaseModel):
    """
    Simplified content document as received from the publishing pipeline.

    Missing JSON fields decode to empty values; there is no distinction
    between an absent field and an explicitly empty one.
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    uuid: str = ""
    title: str = ""
    published_date: str = Field(default="", alias="publishedDate")
    body: str = ""
    type: str = ""
    story_package: str = Field(default="", alias="storyPackage")
    content_package: str = Field(default="", alias="contentPackage")
    editorial_desk: str = Field(default="", alias="editorialDesk")
    publication: list[str] = Field(default_factory=list)

    @field_validator("*", mode="before")
    @classmethod
    def null_as_empty(cls, value: Any, info: ValidationInfo) -> Any:
        """Decode JSON nulls as empty values."""
        if value is None:
            return [] if info.field_name == "publication" else ""
        return value

    def to_json(self) -> dict[str, Any]:
        """Serialize with camelCase keys, omitting empty fields."""
        return {key: value for key, value in self.model_dump(by_alias=True).items() if value}
