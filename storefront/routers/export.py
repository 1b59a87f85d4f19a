import json
import logging
from datetime import datetime

from fastapi import APIRouter, Depends, HTTPException, Request
from fastapi.responses import Response
from pydantic import ValidationError
from sqlalchemy.ext.asyncio import AsyncSession
from starlette.datastructures import UploadFile

from storefront.config import settings
from storefront.database import get_session
from storefront.exceptions import format_validation_errors
from storefront.schemas.transfer import CatalogDocument, ExportScope, ImportResult, MigrationResult
from storefront.viewmodels.export_vm import ExportViewModel, TransferViewModel

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["transfer"])


def _stamp() -> str:
    return datetime.now().strftime("%Y%m%d_%H%M%S")


@router.get("/export/csv")
async def export_csv(session: AsyncSession = Depends(get_session)):
    csv_data = await ExportViewModel.generate_csv(session)
    return Response(
        content=csv_data,
        media_type="text/csv",
        headers={"Content-Disposition": f"attachment; filename=ma_furniture_products_{_stamp()}.csv"},
    )


@router.get("/export/json")
async def export_json(
    data_type: ExportScope = ExportScope.ALL,
    session: AsyncSession = Depends(get_session),
):
    json_data = await ExportViewModel.generate_json(session, data_type)
    return Response(
        content=json_data,
        media_type="application/json",
        headers={"Content-Disposition": f"attachment; filename=ma_furniture_{data_type}_{_stamp()}.json"},
    )


@router.get("/export/pdf")
async def export_pdf(session: AsyncSession = Depends(get_session)):
    pdf_bytes = await ExportViewModel.generate_pdf(session)
    return Response(
        content=pdf_bytes,
        media_type="application/pdf",
        headers={"Content-Disposition": f"attachment; filename=ma_furniture_price_list_{_stamp()}.pdf"},
    )


@router.post("/migrate-from-localstorage", response_model=MigrationResult, response_model_exclude_none=True)
async def migrate_from_localstorage(data: CatalogDocument, session: AsyncSession = Depends(get_session)):
    return await TransferViewModel.migrate(session, data)


async def _read_document(request: Request) -> CatalogDocument:
    """Parse a catalog document sent as the JSON body or as an uploaded `file`."""
    limit = settings.max_upload_size_mb * 1024 * 1024
    if request.headers.get("content-type", "").startswith("multipart/form-data"):
        form = await request.form()
        upload = form.get("file")
        if not isinstance(upload, UploadFile):
            raise HTTPException(status_code=400, detail="No file uploaded")
        raw = await upload.read()
    else:
        raw = await request.body()

    if len(raw) > limit:
        raise HTTPException(status_code=400, detail=f"Import file exceeds {settings.max_upload_size_mb} MB")
    try:
        return CatalogDocument.model_validate(json.loads(raw))
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=format_validation_errors(e.errors()))
    except ValueError:
        raise HTTPException(status_code=400, detail="Import file is not valid JSON")


@router.post("/import", response_model=ImportResult, response_model_exclude_none=True)
async def import_catalog(request: Request, merge: bool = True, session: AsyncSession = Depends(get_session)):
    document = await _read_document(request)
    result = await TransferViewModel.import_catalog(session, document, merge=merge)
    logger.info(
        "Imported catalog (merge=%s): %d/%d products created/updated, %d/%d sections created/updated",
        merge, result.products_created, result.products_updated,
        result.sections_created, result.sections_updated,
    )
    return result
