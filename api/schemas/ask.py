"""
Ask API Schemas - free-form question relay
"""

from pydantic import BaseModel, Field


class AskRequest(BaseModel):
    question: str = Field(..., min_length=1, description="Question forwarded to the completion model")


class AskResponse(BaseModel):
    answer: str = Field(..., description="Model answer, whitespace-trimmed")
