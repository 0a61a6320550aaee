"""Equipment catalog, photo scanning and inventory routes."""

from fastapi import APIRouter, Depends, File, UploadFile

from ...clients.ai import ImageInput
from ...errors import ValidationError
from ...models.user import User
from ...services.equipment import EquipmentService
from ...services.equipment_scan import EquipmentScanner
from ..deps import get_current_user, get_equipment_service, get_scanner
from ..schemas import AddEquipmentRequest, ConfirmEquipmentRequest

router = APIRouter(prefix="/api/equipment", tags=["equipment"])

MAX_IMAGES = 10
MAX_IMAGE_BYTES = 10 * 1024 * 1024


async def _read_images(uploads: list[UploadFile]) -> list[ImageInput]:
    if not uploads:
        raise ValidationError("No images uploaded")
    if len(uploads) > MAX_IMAGES:
        raise ValidationError(f"At most {MAX_IMAGES} images can be uploaded at once")

    images = []
    for upload in uploads:
        content_type = upload.content_type or ""
        if not content_type.startswith("image/"):
            raise ValidationError("Only image files are allowed")
        data = await upload.read()
        if len(data) > MAX_IMAGE_BYTES:
            raise ValidationError(f"{upload.filename} exceeds the 10 MB limit")
        images.append(ImageInput(data=data, mime_type=content_type))
    return images


@router.get("")
async def list_equipment(service: EquipmentService = Depends(get_equipment_service)):
    """The full equipment catalog."""
    equipment = await service.list_catalog()
    return {"status": "success", "data": {"equipment": [e.to_dict() for e in equipment]}}


@router.post("/scan")
async def scan_equipment(
    images: list[UploadFile] = File(...),
    user: User = Depends(get_current_user),
    scanner: EquipmentScanner = Depends(get_scanner),
):
    """Recognize equipment in one or more gym photos."""
    detected = await scanner.scan(await _read_images(images))
    return {"status": "success", "data": {"equipment": [d.to_dict() for d in detected]}}


@router.post("/confirm")
async def confirm_equipment(
    body: ConfirmEquipmentRequest,
    user: User = Depends(get_current_user),
    service: EquipmentService = Depends(get_equipment_service),
):
    """Add confirmed scan results to the catalog, reusing existing names."""
    equipment = await service.confirm_detected(
        [item.model_dump() for item in body.items]
    )
    return {"status": "success", "data": {"equipment": [e.to_dict() for e in equipment]}}


@router.get("/user")
async def get_user_equipment(
    user: User = Depends(get_current_user),
    service: EquipmentService = Depends(get_equipment_service),
):
    links = await service.get_user_equipment(user.id)
    return {"status": "success", "data": {"equipment": [link.to_dict() for link in links]}}


@router.post("/user", status_code=201)
async def add_user_equipment(
    body: AddEquipmentRequest,
    user: User = Depends(get_current_user),
    service: EquipmentService = Depends(get_equipment_service),
):
    links = await service.add_user_equipment(user.id, body.equipment_ids, body.gym_id)
    return {"status": "success", "data": {"equipment": [link.to_dict() for link in links]}}
