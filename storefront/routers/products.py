import logging
from typing import TypeVar

from fastapi import APIRouter, Depends, HTTPException, Request
from pydantic import BaseModel, ValidationError
from sqlalchemy.ext.asyncio import AsyncSession
from starlette.datastructures import UploadFile

from storefront.config import settings
from storefront.database import get_session
from storefront.exceptions import DuplicateError, InvalidUploadError, format_validation_errors
from storefront.schemas.product import ProductCreate, ProductOut, ProductSort, ProductUpdate, SectionMove
from storefront.services.image_service import ImageService
from storefront.viewmodels.product_vm import ProductDetailViewModel, ProductListViewModel

logger = logging.getLogger(__name__)

M = TypeVar("M", bound=BaseModel)

router = APIRouter(prefix="/api/products", tags=["products"])

# form fields where an empty string is a real value rather than "not sent"
_BLANKABLE_FIELDS = {"section", "description", "badge"}


async def _read_product_payload(request: Request) -> tuple[dict, list[UploadFile]]:
    """Read a product from a JSON body or a multipart form with `images` files."""
    if request.headers.get("content-type", "").startswith("application/json"):
        try:
            body = await request.json()
        except ValueError:
            raise HTTPException(status_code=400, detail="Invalid JSON body")
        if not isinstance(body, dict):
            raise HTTPException(status_code=400, detail="Product payload must be an object")
        body.pop("images", None)
        return body, []

    form = await request.form()
    data: dict = {}
    for key in form.keys():
        if key == "images" or key in data:
            continue
        values = [v for v in form.getlist(key) if isinstance(v, str)]
        if key == "features" and len(values) > 1:
            data[key] = values
        elif values and (values[0] != "" or key in _BLANKABLE_FIELDS):
            data[key] = values[0]
    files = [f for f in form.getlist("images") if isinstance(f, UploadFile) and f.filename]
    return data, files


def _validate(model: type[M], data: dict) -> M:
    try:
        return model.model_validate(data)
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=format_validation_errors(e.errors()))


async def _save_images(files: list[UploadFile]) -> list[str]:
    if len(files) > settings.max_upload_files:
        raise HTTPException(status_code=400, detail=f"At most {settings.max_upload_files} images per product")
    service = ImageService()
    urls: list[str] = []
    try:
        for f in files:
            urls.append(service.save_upload(await f.read(), f.filename, f.content_type))
    except InvalidUploadError as e:
        service.delete_many(urls)
        raise HTTPException(status_code=400, detail=str(e))
    return urls


def _check_id(product_id: int) -> None:
    if product_id <= 0:
        raise HTTPException(status_code=400, detail="Invalid product ID")


@router.get("", response_model=list[ProductOut])
async def list_products(
    session: AsyncSession = Depends(get_session),
    category: str | None = None,
    section: str | None = None,
    active: bool | None = None,
    featured: bool | None = None,
    search: str | None = None,
    sort: ProductSort = ProductSort.NEWEST,
    limit: int | None = None,
    offset: int | None = None,
):
    vm = await ProductListViewModel.load(
        session,
        query=search,
        category=category,
        section=section,
        active=active,
        featured=featured,
        sort=sort,
        offset=offset,
        limit=limit,
    )
    return vm.products


@router.get("/sku/{sku}", response_model=ProductOut)
async def get_product_by_sku(sku: str, session: AsyncSession = Depends(get_session)):
    sku = sku.strip()
    if not sku:
        raise HTTPException(status_code=400, detail="SKU parameter is required")
    vm = await ProductDetailViewModel.load_by_sku(session, sku)
    if not vm.product:
        raise HTTPException(status_code=404, detail="Product not found")
    return vm.product


@router.get("/section/{code}", response_model=list[ProductOut])
async def products_in_section(code: str, session: AsyncSession = Depends(get_session)):
    vm = await ProductListViewModel.load_section(session, code)
    return vm.products


@router.post("/update-section")
async def update_products_section(data: SectionMove, session: AsyncSession = Depends(get_session)):
    count = await ProductDetailViewModel.move_section(session, data)
    return {"message": "Products section updated successfully", "updated_count": count}


@router.get("/{product_id}", response_model=ProductOut)
async def get_product(product_id: int, session: AsyncSession = Depends(get_session)):
    _check_id(product_id)
    vm = await ProductDetailViewModel.load(session, product_id)
    if not vm.product:
        raise HTTPException(status_code=404, detail="Product not found")
    return vm.product


@router.post("", response_model=ProductOut, status_code=201)
async def create_product(request: Request, session: AsyncSession = Depends(get_session)):
    payload, files = await _read_product_payload(request)
    data = _validate(ProductCreate, payload)
    images = await _save_images(files)
    data.images = images
    try:
        return await ProductDetailViewModel.create_product(session, data)
    except DuplicateError as e:
        ImageService().delete_many(images)
        raise HTTPException(status_code=400, detail=str(e))


@router.put("/{product_id}", response_model=ProductOut)
async def update_product(product_id: int, request: Request, session: AsyncSession = Depends(get_session)):
    _check_id(product_id)
    payload, files = await _read_product_payload(request)
    data = _validate(ProductUpdate, payload)
    images = await _save_images(files)
    try:
        product = await ProductDetailViewModel.update_product(session, product_id, data, images=images)
    except DuplicateError as e:
        ImageService().delete_many(images)
        raise HTTPException(status_code=400, detail=str(e))
    if not product:
        ImageService().delete_many(images)
        raise HTTPException(status_code=404, detail="Product not found")
    return product


@router.delete("/{product_id}")
async def delete_product(product_id: int, session: AsyncSession = Depends(get_session)):
    _check_id(product_id)
    sku = await ProductDetailViewModel.delete_product(session, product_id)
    if sku is None:
        raise HTTPException(status_code=404, detail="Product not found")
    return {"message": "Product deleted successfully", "deleted_sku": sku}
