from .common import ApiModel


class SkippedRow(ApiModel):
    row: int
    message: str


class ImportResultOut(ApiModel):
    message: str
    imported: int
    skipped: list[SkippedRow]
