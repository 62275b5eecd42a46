from fastapi import APIRouter
from fastapi.responses import FileResponse

from eventhub import uploads

router = APIRouter(tags=["Uploads"])


@router.get("/uploads/{filename}", summary="Serve a previously uploaded image (Public)")
async def get_upload(filename: str):
    return FileResponse(uploads.resolve_upload(filename))
