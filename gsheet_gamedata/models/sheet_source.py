"""
Configured sheet source model
"""

from pydantic import BaseModel, ConfigDict, Field, field_validator


class SheetSource(BaseModel):
    """A named Google Sheets link the user wants to download"""

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "name": "MobTable",
                "url": "https://docs.google.com/spreadsheets/d/1abc123XYZ/edit#gid=0",
            }
        }
    )

    name: str = Field(..., min_length=1, description="Sheet name, also the generated class name")
    url: str = Field(..., min_length=1, description="Google Sheets share link")

    @field_validator("name", "url", mode="before")
    @classmethod
    def strip_whitespace(cls, v):
        if isinstance(v, str):
            return v.strip()
        return v
