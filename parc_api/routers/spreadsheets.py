import logging
from zipfile import BadZipFile

import anyio
from fastapi import APIRouter, Depends, File, Form, HTTPException, Request, Response, UploadFile
from openpyxl.utils.exceptions import InvalidFileException
from sqlalchemy.orm import Session

from ..core.permissions import authorize
from ..db import get_session
from ..models.user import User
from ..schemas.spreadsheet import ImportResultOut
from ..services import spreadsheet_service
from ..services.spreadsheet_service import UnknownDataType

logger = logging.getLogger(__name__)

router = APIRouter(tags=["spreadsheets"], dependencies=[Depends(authorize)])


@router.get("/export/{data_type}")
def export_data(data_type: str, session: Session = Depends(get_session)):
    try:
        content = spreadsheet_service.export_workbook(session, data_type)
    except UnknownDataType:
        raise HTTPException(status_code=400, detail="Invalid data type")
    filename = spreadsheet_service.export_filename(data_type)
    return Response(
        content=content,
        media_type=spreadsheet_service.XLSX_MEDIA_TYPE,
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


@router.post("/import", response_model=ImportResultOut)
async def import_data(
    request: Request,
    file: UploadFile | None = File(default=None),
    type: str | None = Form(default=None),
    session: Session = Depends(get_session),
    user: User = Depends(authorize),
):
    if file is None:
        raise HTTPException(status_code=400, detail="No file uploaded")
    if not type or type not in spreadsheet_service.DATA_TYPES:
        raise HTTPException(status_code=400, detail="Invalid data type")

    max_bytes = request.app.state.settings.IMPORT_MAX_BYTES
    content = await file.read(max_bytes + 1)
    if len(content) > max_bytes:
        raise HTTPException(status_code=413, detail="File too large")

    def _import():
        return spreadsheet_service.import_workbook(session, type, content, user=user)

    try:
        result = await anyio.to_thread.run_sync(_import)
    except UnknownDataType:
        raise HTTPException(status_code=400, detail="Invalid data type")
    except (BadZipFile, InvalidFileException):
        logger.info("Rejected unreadable spreadsheet upload %s", file.filename)
        raise HTTPException(status_code=400, detail="Unreadable spreadsheet file")

    return {
        "message": "Import completed",
        "imported": result.imported,
        "skipped": result.skipped,
    }
