"""Request bodies for the JSON endpoints."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class AnalyzeDirectoryRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    directory_path: str = Field(alias="directoryPath", min_length=1, max_length=4096)


class AskRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    report_id: str = Field(alias="reportId", min_length=1, max_length=100)
    question: str = Field(min_length=1, max_length=4000)
