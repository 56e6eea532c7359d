from pydantic import BaseModel, field_validator


class ReportCreateRequest(BaseModel):
    tripId:  str
    details: str

    @field_validator("details")
    @classmethod
    def check_details(cls, v):
        if not v.strip(): raise ValueError("Details cannot be empty")
        return v.strip()
