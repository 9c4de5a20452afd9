"""Policy queries and decisions."""

from pydantic import BaseModel, ConfigDict, Field


class SpecialContentQuery(BaseModel):
    """Input document for the special content policy."""

    model_config = ConfigDict(populate_by_name=True)

    editorial_desk: str = Field(default="", alias="editorialDesk")


class SpecialContentDecision(BaseModel):
    """Result of the special content policy."""

    is_special_content: bool


class Decision(BaseModel):
    """Policy agent decision envelope."""

    decision_id: str
    result: SpecialContentDecision
