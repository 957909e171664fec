"""POST /api/keyvalues/reconcile"""

from __future__ import annotations

from fastapi import APIRouter, HTTPException

from roibridge.errors import DuplicateKeyError
from roibridge.models.requests import KeyValueReconcileRequest
from roibridge.models.responses import KeyValueReconcileResponse
from roibridge.reconcile.keyvalues import reconcile_key_values

router = APIRouter(prefix="/keyvalues")


@router.post("/reconcile", response_model=KeyValueReconcileResponse)
def reconcile(req: KeyValueReconcileRequest) -> KeyValueReconcileResponse:
    existing = dict(req.existing)
    try:
        result = reconcile_key_values(req.incoming, existing, req.policy)
    except DuplicateKeyError as e:
        raise HTTPException(status_code=422, detail=str(e)) from e

    return KeyValueReconcileResponse(
        entries=dict(result.entries),
        existing_count=result.existing_count,
        new_count=result.new_count,
        updated_count=result.updated_count,
        summary=result.summary(req.policy),
    )
