from pydantic import BaseModel, field_validator
from typing import Optional


class SystemSettingUpdate(BaseModel):
    value:       str
    description: Optional[str] = None

    @field_validator("value", mode="before")
    @classmethod
    def coerce_value(cls, v):
        # Toggles and numbers arrive as JSON scalars; settings are stored as text
        if isinstance(v, bool):
            return "true" if v else "false"
        if isinstance(v, (int, float)):
            return str(v)
        return v
