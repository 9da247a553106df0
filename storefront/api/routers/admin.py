# storefront/api/routers/admin.py
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from storefront.data.database import get_db
from storefront.domain.schemas import AdminNotifications, Ack
from storefront.services.order_service import OrderService

router = APIRouter(prefix="/admin", tags=["admin"])


def get_service(db: Session):
    return OrderService(db)


@router.get("/notificaciones", response_model=AdminNotifications)
def get_notifications(db: Session = Depends(get_db)):
    """
    Polled by the admin dashboard: count of unseen orders and their summaries.
    """
    svc = get_service(db)
    return svc.list_new_orders()


@router.post("/notificaciones/visto/{order_id}", response_model=Ack)
def mark_seen(order_id: int, db: Session = Depends(get_db)):
    svc = get_service(db)
    try:
        svc.mark_seen(order_id)
    except ValueError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return {"success": True}
