"""Message template endpoints.

Unlike the other resources, failures here forward the underlying error text.
"""

from __future__ import annotations

from fastapi import APIRouter, Query

from ..errors import ValidationFailedError
from .deps import AppSettings, Gateway, remote_operation
from .schemas import TemplateBody

router = APIRouter(tags=["templates"])


def _template_data(body: TemplateBody) -> dict:
    data = {
        "name": body.name,
        "message": body.message,
        "htmlContent": body.html_content or "",
    }
    if "pdf_file" in body.model_fields_set:
        data["pdfFile"] = body.pdf_file or ""
    return data


@router.get("/templates/pdfs")
async def list_pdfs(settings: AppSettings):
    """Files a template may attach, with the labels used in messages."""
    pdfs = [{"name": name, "label": label} for name, label in settings.pdf_files.items()]
    return {"success": True, "pdfs": pdfs, "baseUrl": settings.pdf_base_url}


@router.get("/templates")
async def list_templates(gateway: Gateway):
    with remote_operation("Failed to fetch templates", forward_detail=True):
        templates = await gateway.list_templates()
    return {"success": True, "templates": [t.to_dict() for t in templates]}


@router.post("/templates")
async def create_template(body: TemplateBody, gateway: Gateway):
    if not body.name or not body.message:
        raise ValidationFailedError("Name and message are required")

    with remote_operation("Failed to create template", forward_detail=True):
        template = await gateway.create_template(_template_data(body))
    return {"success": True, "template": template.to_dict()}


@router.put("/templates")
async def update_template(body: TemplateBody, gateway: Gateway):
    if not body.row_number or not body.name or not body.message:
        raise ValidationFailedError("Row number, name, and message are required")

    with remote_operation("Failed to update template", forward_detail=True):
        template = await gateway.update_template(
            body.row_number, _template_data(body), expected_id=body.id
        )
    return {"success": True, "template": template.to_dict() if template else None}


@router.delete("/templates")
async def delete_template(
    gateway: Gateway,
    row_number: str | None = Query(None, alias="rowNumber"),
    template_id: str | None = Query(None, alias="id"),
):
    if not row_number:
        raise ValidationFailedError("Row number is required")
    try:
        row = int(row_number)
    except ValueError as e:
        raise ValidationFailedError("Row number must be an integer") from e

    with remote_operation("Failed to delete template", forward_detail=True):
        await gateway.delete_template(row, expected_id=template_id)
    return {"success": True}
