# agent700_adapter/api/routes/operations.py

from typing import List

from fastapi import APIRouter

from agent700_adapter.core.models import OperationInfo
from agent700_adapter.core.operations import list_operations

router = APIRouter(prefix="/api/v1", tags=["v1"])


@router.get("/operations", response_model=List[OperationInfo])
def operations():
    """Catalog of supported resource/operation pairs."""
    return [
        OperationInfo(
            resource=spec.resource,
            operation=spec.operation,
            name=spec.name,
            action=spec.action,
            method=spec.method,
            required=[req.name for req in spec.required],
        )
        for spec in list_operations()
    ]
