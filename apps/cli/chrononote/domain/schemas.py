from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class ConfigFileModel(BaseModel):
    model_config = ConfigDict(extra="ignore")

    buffer_file: str = ""
    notes_dir: str = ""
