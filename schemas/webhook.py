"""
Link webhook envelope schemas.

Matches the documented webhook root: { object: str, entry: [Entry] }.
Extra fields are ignored to keep parsing resilient to API changes.
"""

from pydantic import BaseModel, ConfigDict, Field


class IdRef(BaseModel):
    """A ``{"id": ...}`` reference to a platform object."""

    model_config = ConfigDict(extra="ignore", coerce_numbers_to_str=True)

    id: str = Field(description="Platform object ID", examples=["1234567890"])


class ChangeValue(BaseModel):
    """Payload of a single link change."""

    model_config = ConfigDict(extra="ignore")

    link: str | None = Field(
        default=None,
        description="Shared URL (absent for top-level collection requests)",
        examples=["https://taaskly.example.com/document/42"],
    )
    community: IdRef = Field(description="Community the change originates from")
    user: IdRef = Field(description="Platform user who triggered the change")
    payload: str | None = Field(
        default=None,
        description="Postback button payload",
        examples=["Task.Close"],
    )


class Change(BaseModel):
    """A single change inside a webhook entry."""

    model_config = ConfigDict(extra="ignore")

    field: str = Field(
        description="Change type: preview, collection or postback",
        examples=["preview"],
    )
    value: ChangeValue


class Entry(BaseModel):
    """A webhook entry; link callbacks carry exactly one change."""

    model_config = ConfigDict(extra="ignore")

    changes: list[Change]


class WebhookEnvelope(BaseModel):
    """Root of a link webhook request body."""

    model_config = ConfigDict(
        extra="ignore",
        json_schema_extra={
            "examples": [
                {
                    "object": "link",
                    "entry": [
                        {
                            "changes": [
                                {
                                    "field": "preview",
                                    "value": {
                                        "link": "https://taaskly.example.com/document/42",
                                        "community": {"id": "1"},
                                        "user": {"id": "100012345"},
                                    },
                                }
                            ]
                        }
                    ],
                }
            ]
        },
    )

    object: str
    entry: list[Entry]
