"""
Account linking schemas.

Defines data models for connecting a local user to a platform identity.
"""

from pydantic import BaseModel, ConfigDict, Field, field_validator


class AccountLinkRequest(BaseModel):
    """
    Request schema for linking a local user to a platform user.

    Used by POST /api/accounts/link once the platform has confirmed the
    person's identity and community.
    """

    user_id: int = Field(description="Local user ID", examples=[7])
    community_id: int = Field(description="Platform community ID", examples=[1])
    workplace_id: str = Field(
        description="Platform user ID to attach to the local user",
        examples=["100012345"],
    )

    @field_validator("workplace_id")
    @classmethod
    def workplace_id_not_empty(cls, v: str) -> str:
        """Ensure workplace_id is not empty or whitespace only."""
        if not v or not v.strip():
            raise ValueError("workplace_id cannot be empty")
        return v.strip()

    model_config = ConfigDict(
        json_schema_extra={
            "examples": [
                {
                    "user_id": 7,
                    "community_id": 1,
                    "workplace_id": "100012345",
                }
            ]
        }
    )


class AccountLinkResponse(BaseModel):
    """Response schema for account linking."""

    success: bool = Field(description="Whether the link was saved", examples=[True])
    user_id: int = Field(description="Local user ID", examples=[7])
    workplace_id: str = Field(description="Linked platform user ID", examples=["100012345"])
