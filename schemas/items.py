"""
Encoded link item schemas.

The platform renders previews and collections from these exact shapes.
Optional fields that are None are left out of the JSON entirely
(routes serialize with ``exclude_none``).
"""

from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field

from schemas.common import ItemPrivacy


class AdditionalData(BaseModel):
    """A labelled value shown under a task preview."""

    title: str = Field(examples=["Owner", "Created", "Priority"])
    format: str = Field(description="'user', 'text' or 'datetime'", examples=["text"])
    value: str
    color: str | None = Field(default=None, examples=["red"])


class PostbackAction(BaseModel):
    """A button rendered on a task preview."""

    value: str = Field(description="Button label", examples=["Close"])
    color: str = "red"
    payload: str = Field(description="Sent back as change.payload on click", examples=["Task.Close"])
    disabled: bool = False
    type: str = "postback_button"


class LinkItem(BaseModel):
    """Fields shared by every encoded item."""

    model_config = ConfigDict(use_enum_values=True, validate_default=True)

    link: str
    title: str
    privacy: ItemPrivacy
    canonical_link: str | None = None


class DocumentItem(LinkItem):
    """Encoded document."""

    description: str
    icon: str
    download_url: str
    type: Literal["doc"] = "doc"


class FolderItem(LinkItem):
    """Encoded folder (also used for the synthetic Tasks folder)."""

    type: Literal["folder"] = "folder"


class TaskItem(LinkItem):
    """Encoded task, personalized for the calling user."""

    privacy: ItemPrivacy = ItemPrivacy.PERSONALIZED
    type: Literal["task"] = "task"
    icon: str
    actions: list[PostbackAction] = Field(default_factory=list)
    additional_data: list[AdditionalData] = Field(default_factory=list)


EncodedItem = Annotated[DocumentItem | FolderItem | TaskItem, Field(discriminator="type")]


class LinkCallbackResponse(BaseModel):
    """Response body of the link callback endpoint."""

    data: list[EncodedItem] = Field(default_factory=list)
    linked_user: bool = Field(
        description="Whether the calling platform user is linked to a local account",
        examples=[True],
    )

    model_config = ConfigDict(
        json_schema_extra={
            "examples": [
                {
                    "data": [
                        {
                            "link": "https://taaskly.example.com/folder/3",
                            "title": "Specs",
                            "privacy": "organization",
                            "canonical_link": "https://taaskly.example.com/folder/3",
                            "type": "folder",
                        }
                    ],
                    "linked_user": True,
                }
            ]
        }
    )


class LinkErrorDetail(BaseModel):
    """Error body returned when a webhook cannot be handled."""

    error: str = Field(examples=["unknown_community"])
    message: str = Field(examples=["Unknown community."])


class LinkErrorResponse(BaseModel):
    """Full error response body (FastAPI wraps errors under ``detail``)."""

    detail: LinkErrorDetail
