from pydantic import BaseModel


class UnitError(BaseModel):
    file: str
    stage: str
    error: str


class PublishReport(BaseModel):
    discovered: int = 0
    written: int = 0
    drafts_skipped: int = 0
    sections: int = 0
    errors: list[UnitError] = []
    duration: float = 0.0
