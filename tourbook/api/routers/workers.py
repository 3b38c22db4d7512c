from typing import Annotated

from fastapi import APIRouter, Depends, Query, status

from tourbook.api.dependencies import get_use_cases

router = APIRouter()


@router.post("/workers/notifications/process", status_code=status.HTTP_200_OK)
async def process_notification_outbox(
    use_cases: Annotated[dict, Depends(get_use_cases)],
    limit: int = Query(default=50, ge=1, le=500),
) -> dict:
    """
    Reintenta las notificaciones pendientes del outbox.

    Pensado para un cron o scheduler externo; las entradas que agotan
    sus intentos quedan en FAILED.
    """
    return await use_cases["process_notification_outbox"].execute(limit=limit)
