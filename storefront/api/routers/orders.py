# storefront/api/routers/orders.py
import uuid

from fastapi import APIRouter, Depends, Header, HTTPException, Response
from redis.exceptions import RedisError
from sqlalchemy.orm import Session

from storefront.data.database import get_db
from storefront.domain.schemas import OrderCreate, OrderCreated, OrderOut
from storefront.services.order_service import OrderService
from storefront.services.submission_lock import SubmissionLock
from storefront.utils.logging import get_logger

logger = get_logger(__name__)

router = APIRouter(prefix="/orders", tags=["orders"])


def get_service(db: Session):
    return OrderService(db)


def get_submission_lock() -> SubmissionLock:
    return SubmissionLock()


@router.post("", response_model=OrderCreated, status_code=201)
def create_order(
    payload: OrderCreate,
    response: Response,
    idempotency_key: str | None = Header(None, alias="Idempotency-Key", max_length=128),
    db: Session = Depends(get_db),
    lock: SubmissionLock = Depends(get_submission_lock),
):
    """
    Places an order. Totals are recomputed on the server and must match the payload.

    With an Idempotency-Key header a repeated submit of the same checkout gets the
    already placed order back (200), or 409 while the first submit is still running.
    """
    svc = get_service(db)
    owner = uuid.uuid4().hex

    if idempotency_key:
        try:
            acquired = lock.acquire(idempotency_key, owner)
            existing_id = None if acquired else lock.lookup(idempotency_key)
        except RedisError as e:
            logger.error(f"Submission lock unavailable: {e}")
            raise HTTPException(status_code=503, detail="Servicio temporalmente no disponible")

        if not acquired:
            if existing_id is None:
                raise HTTPException(status_code=409, detail="Este pedido se está procesando")
            try:
                order = svc.get_order(existing_id)
            except ValueError:
                raise HTTPException(status_code=409, detail="Este pedido ya fue enviado")
            logger.info(f"Repeated submit {idempotency_key}, returning order {order['order_number']}")
            response.status_code = 200
            return {"success": True, "order": order}

    try:
        order = svc.create_order(payload)
    except ValueError as e:
        if idempotency_key:
            lock.release(idempotency_key, owner)
        raise HTTPException(status_code=400, detail=str(e))
    except Exception:
        #let the client resubmit with the same key after a server failure
        if idempotency_key:
            lock.release(idempotency_key, owner)
        raise

    if idempotency_key:
        try:
            lock.complete(idempotency_key, owner, order["id"])
        except RedisError as e:
            #the order exists, a lost key only costs the replay
            logger.error(f"Could not record order {order['id']} for key {idempotency_key}: {e}")

    return {"success": True, "order": order}


@router.get("/{order_id}", response_model=OrderOut)
def get_order(order_id: int, db: Session = Depends(get_db)):
    svc = get_service(db)
    try:
        return svc.get_order(order_id)
    except ValueError as e:
        raise HTTPException(status_code=404, detail=str(e))
