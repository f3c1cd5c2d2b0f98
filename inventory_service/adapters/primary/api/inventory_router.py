"""
Router for the inventory catalog.

Endpoints:
- POST   /register               create an item (multipart, optional photo)
- GET    /inventory              list items
- GET    /inventory/{id}         item detail
- PUT    /inventory/{id}         partial update (JSON or form)
- DELETE /inventory/{id}         delete an item and its photo
- GET    /inventory/{id}/photo   photo bytes
- PUT    /inventory/{id}/photo   replace the photo (multipart)
- POST   /search                 lookup by id, optionally annotated with the photo URL
"""
import mimetypes
from typing import Any, Callable, Dict, Optional, Tuple, Type, TypeVar

from fastapi import APIRouter, Depends, File, Form, Request, UploadFile
from fastapi.responses import FileResponse
from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError
from sqlalchemy.orm import Session

from inventory_service.adapters.secondary.database.config import get_db
from inventory_service.adapters.secondary.database.sql_repository import SqlItemRepository
from inventory_service.adapters.secondary.storage.filesystem_blob_store import FilesystemBlobStore
from inventory_service.application.services import ItemService, to_response
from inventory_service.config.settings import get_settings
from inventory_service.core.domain.errors import ValidationError
from inventory_service.core.domain.models import (
    ErrorResponse,
    InventoryItemResponse,
    InventoryListResponse,
    ItemMutationResponse,
    ItemUpdateRequest,
    MessageResponse,
    SearchRequest,
)
from inventory_service.core.ports.blob_store import BlobStorePort

router = APIRouter(tags=["Inventory"])

ModelT = TypeVar("ModelT", bound=BaseModel)

DEFAULT_PHOTO_MEDIA_TYPE = "image/jpeg"

NOT_FOUND = {404: {"model": ErrorResponse, "description": "Item not found"}}
BAD_REQUEST = {400: {"model": ErrorResponse, "description": "Missing or malformed field"}}


# ============================================================================
# DEPENDENCY INJECTION
# ============================================================================

def get_blob_store() -> BlobStorePort:
    return FilesystemBlobStore(get_settings().cache_dir)


def get_service(
    db: Session = Depends(get_db),
    blob_store: BlobStorePort = Depends(get_blob_store)
) -> ItemService:
    return ItemService(SqlItemRepository(db), blob_store)


def get_photo_url_builder(request: Request) -> Callable[[int], str]:
    """Absolute URL of GET /inventory/{id}/photo, based on the incoming request."""
    def build(item_id: int) -> str:
        return str(request.url_for("get_item_photo", item_id=item_id))
    return build


async def _read_body(request: Request) -> Dict[str, Any]:
    """Body fields from a JSON, urlencoded or multipart request."""
    content_type = request.headers.get("content-type", "")

    if content_type.startswith("application/json"):
        try:
            data = await request.json()
        except ValueError:
            raise ValidationError("Malformed JSON body")
        if not isinstance(data, dict):
            raise ValidationError("JSON body must be an object")
        return data

    if content_type.startswith(("application/x-www-form-urlencoded", "multipart/form-data")):
        form = await request.form()
        return {key: value for key, value in form.items() if isinstance(value, str)}

    return {}


def _validate(model: Type[ModelT], data: Dict[str, Any]) -> ModelT:
    try:
        return model.model_validate(data)
    except PydanticValidationError as e:
        details = "; ".join(
            f"{'.'.join(str(part) for part in error['loc'])}: {error['msg']}"
            for error in e.errors()
        )
        raise ValidationError(f"Invalid request body: {details}")


async def read_update_body(request: Request) -> ItemUpdateRequest:
    return _validate(ItemUpdateRequest, await _read_body(request))


async def read_search_body(request: Request) -> SearchRequest:
    data = await _read_body(request)
    if data.get("id") in (None, ""):
        raise ValidationError("Missing item id")
    return _validate(SearchRequest, data)


def _upload_parts(photo: Optional[UploadFile]) -> Tuple[Any, Optional[str]]:
    """(stream, filename) of an upload, (None, None) when no file was sent."""
    if photo is None or not photo.filename:
        return None, None
    return photo.file, photo.filename


def _body_schema(model: Type[BaseModel]) -> Dict[str, Any]:
    schema = model.model_json_schema()
    return {
        "requestBody": {
            "required": True,
            "content": {
                "application/json": {"schema": schema},
                "application/x-www-form-urlencoded": {"schema": schema},
            },
        }
    }


# ============================================================================
# ENDPOINTS
# ============================================================================

@router.post(
    "/register",
    response_model=ItemMutationResponse,
    status_code=201,
    responses=BAD_REQUEST
)
def register_item(
    inventory_name: Optional[str] = Form(None, description="Item name (required)"),
    description: Optional[str] = Form(None),
    photo: Optional[UploadFile] = File(None, description="Optional photo"),
    service: ItemService = Depends(get_service)
):
    """
    Register a new inventory item.

    The photo, when given, is stored first and the item is created pointing at it.
    """
    stream, filename = _upload_parts(photo)
    item = service.register_item(inventory_name, description, stream, filename)
    return ItemMutationResponse(message="Inventory item created successfully", item=item)


@router.get("/inventory", response_model=InventoryListResponse)
def list_inventory(
    service: ItemService = Depends(get_service),
    photo_url_for: Callable[[int], str] = Depends(get_photo_url_builder)
):
    """List all items in insertion order, each with its `photoUrl`."""
    items = [to_response(item, photo_url_for) for item in service.list_items()]
    return InventoryListResponse(count=len(items), items=items)


@router.get("/inventory/{item_id}", response_model=InventoryItemResponse, responses=NOT_FOUND)
def get_inventory_item(
    item_id: int,
    service: ItemService = Depends(get_service),
    photo_url_for: Callable[[int], str] = Depends(get_photo_url_builder)
):
    return to_response(service.get_item(item_id), photo_url_for)


@router.put(
    "/inventory/{item_id}",
    response_model=ItemMutationResponse,
    responses={**NOT_FOUND, **BAD_REQUEST},
    openapi_extra=_body_schema(ItemUpdateRequest)
)
def update_inventory_item(
    item_id: int,
    body: ItemUpdateRequest = Depends(read_update_body),
    service: ItemService = Depends(get_service)
):
    """
    Partially update an item.

    Accepts JSON or form data. A missing or empty `name` / `description`
    keeps the stored value.
    """
    item = service.update_item(item_id, name=body.name, description=body.description)
    return ItemMutationResponse(message="Item updated successfully", item=item)


@router.delete("/inventory/{item_id}", response_model=MessageResponse, responses=NOT_FOUND)
def delete_inventory_item(item_id: int, service: ItemService = Depends(get_service)):
    """Delete an item. Its photo file is removed afterwards on a best-effort basis."""
    service.delete_item(item_id)
    return MessageResponse(message="Item deleted successfully")


@router.get(
    "/inventory/{item_id}/photo",
    name="get_item_photo",
    response_class=FileResponse,
    responses={200: {"content": {"image/*": {}}, "description": "Photo bytes"}, **NOT_FOUND}
)
def get_item_photo(item_id: int, service: ItemService = Depends(get_service)):
    path = service.get_photo(item_id)
    media_type, _ = mimetypes.guess_type(path.name)
    if not media_type or not media_type.startswith("image/"):
        media_type = DEFAULT_PHOTO_MEDIA_TYPE
    return FileResponse(path, media_type=media_type)


@router.put(
    "/inventory/{item_id}/photo",
    response_model=ItemMutationResponse,
    responses={**NOT_FOUND, **BAD_REQUEST}
)
def replace_item_photo(
    item_id: int,
    photo: Optional[UploadFile] = File(None, description="New photo (required)"),
    service: ItemService = Depends(get_service)
):
    """
    Replace the photo of an item.

    The previous photo file is removed only after the item points at the new one.
    """
    stream, filename = _upload_parts(photo)
    item = service.replace_photo(item_id, stream, filename)
    return ItemMutationResponse(message="Photo updated", item=item)


@router.post(
    "/search",
    response_model=InventoryItemResponse,
    responses={**NOT_FOUND, **BAD_REQUEST},
    openapi_extra=_body_schema(SearchRequest)
)
def search_inventory(
    body: SearchRequest = Depends(read_search_body),
    service: ItemService = Depends(get_service),
    photo_url_for: Callable[[int], str] = Depends(get_photo_url_builder)
):
    """
    Look up an item by id.

    With `has_photo` set to `on`, `true` or `1` and an item that has a photo,
    the returned description ends with a `Photo: <url>` line. The stored
    description is not modified.
    """
    return service.search_item(body.id, body.has_photo, photo_url_for)
