"""
Event routes - events, guest lists, organizer assignments and audit logs
"""

from typing import Optional
from fastapi import APIRouter, Depends, UploadFile, File, Query
from fastapi.responses import Response
from sqlalchemy.orm import Session

from app.core.config import settings
from app.core.db import get_db
from app.core.errors import ValidationError
from app.core.roles import Role
from app.schemas.account import Actor
from app.schemas.common import Pagination
from app.schemas.event import EventCreate, EventUpdate, AssignOrganizerRequest
from app.schemas.guest import GuestUpload
from app.services.assignment_service import AssignmentService
from app.services.audit_service import AuditTrail
from app.services.event_service import EventService
from app.services.excel_service import ExcelService
from app.services.guest_service import GuestService
from app.utils.security import get_current_actor, require_roles
from app.utils.responses import success_response

router = APIRouter()

XLSX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"

@router.get("")
async def list_events(
    db: Session = Depends(get_db),
    actor: Actor = Depends(get_current_actor)
):
    """Events visible to the caller"""
    events = EventService.list_events(db, actor)
    return success_response(message="Events retrieved successfully", data=events)

@router.post("")
async def create_event(
    event_data: EventCreate,
    db: Session = Depends(get_db),
    actor: Actor = Depends(require_roles(Role.EVENT_MANAGER))
):
    """Create a new event"""
    event = EventService.create_event(db, actor, event_data)
    return success_response(
        message="Event created successfully",
        data=event,
        status_code=201
    )

@router.get("/{event_id}")
async def get_event(
    event_id: str,
    db: Session = Depends(get_db),
    actor: Actor = Depends(get_current_actor)
):
    """Get event details"""
    event = EventService.get_event(db, actor, event_id)
    return success_response(message="Event details retrieved", data=event)

@router.patch("/{event_id}")
async def update_event(
    event_id: str,
    event_update: EventUpdate,
    db: Session = Depends(get_db),
    actor: Actor = Depends(require_roles(Role.EVENT_MANAGER))
):
    """Update event information"""
    event = EventService.update_event(db, actor, event_id, event_update)
    return success_response(message="Event updated successfully", data=event)

@router.delete("/{event_id}")
async def delete_event(
    event_id: str,
    db: Session = Depends(get_db),
    actor: Actor = Depends(require_roles(Role.EVENT_MANAGER))
):
    """Delete an event with its guests and assignments"""
    EventService.delete_event(db, actor, event_id)
    return success_response(
        message="Event deleted successfully",
        data={"deleted_event_id": event_id}
    )

# -------- guests --------

@router.get("/{event_id}/guests")
async def list_guests(
    event_id: str,
    search: Optional[str] = Query(None),
    page: int = Query(1, ge=1),
    per_page: int = Query(50, ge=1, le=500),
    db: Session = Depends(get_db),
    actor: Actor = Depends(get_current_actor)
):
    """Search and list guests for an event"""
    offset = (page - 1) * per_page
    guests, total = GuestService.list_guests(db, actor, event_id, search=search, offset=offset, limit=per_page)

    return success_response(
        message="Guests retrieved successfully",
        data={
            "guests": guests,
            "pagination": Pagination.of(page, per_page, total)
        }
    )

@router.post("/{event_id}/guests")
async def upload_guest_rows(
    event_id: str,
    upload: GuestUpload,
    db: Session = Depends(get_db),
    actor: Actor = Depends(require_roles(Role.EVENT_MANAGER))
):
    """Add guests from already-parsed rows"""
    count, guests = GuestService.upload_guests(db, actor, event_id, upload.guests)
    return success_response(
        message=f"{count} guests imported.",
        data={"count": count, "guests": guests}
    )

@router.post("/{event_id}/upload-guests")
async def upload_guest_file(
    event_id: str,
    file: UploadFile = File(...),
    db: Session = Depends(get_db),
    actor: Actor = Depends(require_roles(Role.EVENT_MANAGER))
):
    """Upload and process an Excel guest list"""
    # Ownership first so outsiders learn nothing about the file handling
    EventService.require_owned(db, actor, event_id)

    # Validate file type
    if not file.filename or not file.filename.lower().endswith('.xlsx'):
        raise ValidationError("Invalid file format. Please upload an Excel file (.xlsx)")

    file_content = await file.read()
    if len(file_content) > settings.MAX_UPLOAD_SIZE:
        raise ValidationError("File is too large")

    rows = ExcelService.parse_guest_rows(file_content)
    count, guests = GuestService.upload_guests(db, actor, event_id, rows)

    return success_response(
        message=f"Excel file processed successfully. {count} guests imported.",
        data={
            "count": count,
            "filename": file.filename,
            "guests": guests
        }
    )

@router.get("/{event_id}/guests/export.xlsx")
async def export_guests(
    event_id: str,
    db: Session = Depends(get_db),
    actor: Actor = Depends(get_current_actor)
):
    """Export current guest data with check-in state to Excel"""
    event = GuestService.require_view(db, actor, event_id)
    guests, _ = GuestService.list_guests(db, actor, event_id)
    excel_content = ExcelService.export_guests(guests, include_checkin=True)

    return Response(
        content=excel_content,
        media_type=XLSX_MEDIA_TYPE,
        headers={"Content-Disposition": f"attachment; filename=guests_{event.id}.xlsx"}
    )

# -------- organizers --------

@router.get("/{event_id}/organizers")
async def list_event_organizers(
    event_id: str,
    db: Session = Depends(get_db),
    actor: Actor = Depends(get_current_actor)
):
    """Organizers assigned to an event"""
    organizers = AssignmentService.organizers_for_event(db, actor, event_id)
    return success_response(
        message="Organizers retrieved successfully",
        data=[o.to_public() for o in organizers]
    )

@router.post("/{event_id}/organizers")
async def assign_organizer(
    event_id: str,
    payload: AssignOrganizerRequest,
    db: Session = Depends(get_db),
    actor: Actor = Depends(require_roles(Role.EVENT_MANAGER))
):
    """Assign an organizer to an event"""
    assignment = AssignmentService.assign(db, actor, event_id, payload.organizer_id)
    return success_response(message="Organizer assigned", data=assignment)

@router.delete("/{event_id}/organizers/{organizer_id}")
async def remove_organizer(
    event_id: str,
    organizer_id: str,
    db: Session = Depends(get_db),
    actor: Actor = Depends(require_roles(Role.EVENT_MANAGER))
):
    """Remove an organizer from an event"""
    AssignmentService.remove(db, actor, event_id, organizer_id)
    return success_response(message="Organizer removed")

# -------- audit --------

@router.get("/{event_id}/audit-logs")
async def list_audit_logs(
    event_id: str,
    db: Session = Depends(get_db),
    actor: Actor = Depends(get_current_actor)
):
    """Audit trail of an event, newest first"""
    entries = AuditTrail.list_for_event(db, actor, event_id)
    return success_response(message="Audit logs retrieved successfully", data=entries)
