"""
Public API routes - no authentication required
"""

from fastapi import APIRouter
from fastapi.responses import Response

from app.services.excel_service import ExcelService

router = APIRouter()

@router.get("/health")
async def health_check():
    """Health check endpoint"""
    return {"status": "ok"}

@router.get("/guests/template.xlsx")
async def download_template():
    """Download the Excel template for guest uploads"""
    template_bytes = ExcelService.create_template()

    return Response(
        content=template_bytes,
        media_type="application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
        headers={"Content-Disposition": "attachment; filename=guest_list_template.xlsx"}
    )
