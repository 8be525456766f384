"""
app/api/routers/import_router.py

Donor spreadsheet import endpoint.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, UploadFile, status
from sqlalchemy.orm import Session

from app.api.dependencies import get_spreadsheet_upload
from app.config import get_import_settings
from app.schemas.imports import ImportSummaryResponse
from app.services.donor_import_service import (
    DonorImportService,
    ImportHeaderError,
    ImportPersistenceError,
    get_donor_import_service,
)
from db.session import get_db

router = APIRouter(prefix="/api/import", tags=["import"])


@router.post("/excel", response_model=ImportSummaryResponse)
def import_excel(
    file: UploadFile = Depends(get_spreadsheet_upload),
    db: Session = Depends(get_db),
    import_service: DonorImportService = Depends(get_donor_import_service),
) -> ImportSummaryResponse:
    """
    Import donors and donations from an uploaded .xlsx/.xls/.csv/.json file.
    """

    max_bytes = get_import_settings().max_upload_bytes
    try:
        content = file.file.read(max_bytes + 1)
        if len(content) > max_bytes:
            raise HTTPException(
                status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
                detail=f"File exceeds the {max_bytes} byte upload limit.",
            )
        summary = import_service.import_file(filename=file.filename or "", content=content, db=db)
    except ImportHeaderError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=exc.to_dict(),
        ) from exc
    except ImportPersistenceError as exc:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Unable to persist imported rows.",
        ) from exc
    finally:
        file.file.close()

    return ImportSummaryResponse.model_validate(summary)
