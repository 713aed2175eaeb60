from fastapi import APIRouter, Depends

from app.api.deps import get_current_user_id
from app.api.v1.schemas import NotificationSchema
from app.infrastructure.notifications.memory_sink import MemoryNotificationSink
from app.wiring.dependencies import get_notification_sink

router = APIRouter()


@router.get("/notifications", response_model=list[NotificationSchema])
def list_notifications(
    user_id: int = Depends(get_current_user_id),
    sink: MemoryNotificationSink = Depends(get_notification_sink),
):
    return [
        NotificationSchema(content=n.content, read=n.read, created_at=n.created_at)
        for n in sink.list_for(user_id)
    ]
