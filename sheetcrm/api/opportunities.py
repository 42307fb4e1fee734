"""Opportunities endpoints."""

from __future__ import annotations

from fastapi import APIRouter
from pydantic.alias_generators import to_camel

from ..errors import ValidationFailedError
from .deps import Gateway, remote_operation
from .schemas import OPPORTUNITY_UPDATE_FIELDS, OpportunityBody

router = APIRouter(tags=["opportunities"])


@router.get("/opportunities")
async def list_opportunities(gateway: Gateway):
    with remote_operation("Failed to fetch opportunities"):
        opportunities = await gateway.list_opportunities()
    return {"success": True, "opportunities": [o.to_dict() for o in opportunities]}


@router.post("/opportunities")
async def save_opportunity(body: OpportunityBody, gateway: Gateway):
    """rowNumber present: per-field update. Absent: create from the body."""
    if body.row_number:
        fields = body.model_dump(include=set(OPPORTUNITY_UPDATE_FIELDS), exclude_unset=True)
        with remote_operation("Failed to process opportunity"):
            for field in OPPORTUNITY_UPDATE_FIELDS:
                if field not in fields:
                    continue
                value = "" if fields[field] is None else str(fields[field])
                await gateway.update_opportunity_field(body.row_number, to_camel(field), value)
            opportunity = await gateway.get_opportunity(body.row_number)
        return {"success": True, "opportunity": opportunity.to_dict() if opportunity else None}

    if not body.name or not body.contact_name:
        raise ValidationFailedError("Opportunity name and contact name are required")

    data = body.model_dump(exclude={"row_number"}, exclude_none=True, by_alias=True)
    if "amount" in data:
        data["amount"] = str(data["amount"])

    with remote_operation("Failed to process opportunity"):
        opportunity = await gateway.create_opportunity(data)
    return {"success": True, "opportunity": opportunity.to_dict()}
