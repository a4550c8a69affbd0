from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, computed_field

CONVERTED = "converted"
SKIPPED = "skipped"


class FileOutcome(BaseModel):
    input_path: str
    output_path: str
    status: str
    bytes_written: int = 0
    elapsed_sec: float = 0.0
    message: str = ""


class RunReport(BaseModel):
    input_root: str
    output_root: str
    entry_url: str
    start_time: float
    end_time: Optional[float] = None
    outcomes: List[FileOutcome] = []

    @computed_field  # type: ignore[misc]
    @property
    def converted(self) -> int:
        return sum(1 for o in self.outcomes if o.status == CONVERTED)

    @computed_field  # type: ignore[misc]
    @property
    def skipped(self) -> int:
        return sum(1 for o in self.outcomes if o.status == SKIPPED)

    def summary(self) -> str:
        return f"files={len(self.outcomes)} converted={self.converted} skipped={self.skipped}"
