from pydantic import BaseModel, Field
from typing import List, Optional


class RomanizeRequest(BaseModel):
    text: Optional[str] = None


class RomanizeFullRequest(BaseModel):
    text: Optional[str] = None
    limit: Optional[int] = Field(None, ge=1, description="Number of interpretations ichiran-cli returns")


class GlossEntry(BaseModel):
    pos: str = Field("", description="Part of speech, e.g. n or v5r")
    info: str = ""
    definition: str


class WordEntry(BaseModel):
    word: str = Field(..., description="Romanized headword")
    text: str = Field(..., description="Original-script form")
    kana: str = ""
    glosses: List[GlossEntry]


class RomanizationResult(BaseModel):
    romanized: str
    words: List[WordEntry]


class HealthResponse(BaseModel):
    status: str = "ok"
    service: str = "ichiran-api"


class ErrorResponse(BaseModel):
    error: str
    message: Optional[str] = None
