# storefront/services/storefront_client.py
import requests
from requests import RequestException

from storefront.domain.errors import CatalogFetchFailure, OrderSubmissionFailure
from storefront.domain.schemas import ALL_CATEGORIES, AdminNotifications, OrderCreated
from storefront.utils.retry import http_retry
from storefront.utils.settings import API_URL, HTTP_TIMEOUT
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


class StorefrontClient:
    """
    HTTP client for the storefront API, used by the shop session and the admin poller.
    Catalog and order calls are not retried automatically, the user retries.
    Admin calls are idempotent and go through http_retry.
    """

    def __init__(self, base_url: str | None = None, timeout: float = HTTP_TIMEOUT, session: requests.Session | None = None):
        self.base_url = (base_url or API_URL).rstrip("/")
        self.timeout = timeout
        self.http = session or requests.Session()

    def get_products(self, category: str = "", search: str = "") -> list:
        params = {}
        if category and category != ALL_CATEGORIES:
            params["categoria"] = category
        if search:
            params["busqueda"] = search

        url = f"{self.base_url}/products"
        logger.info(f"StorefrontClient GET {url} {params}")

        try:
            resp = self.http.get(url, params=params, timeout=self.timeout)
            resp.raise_for_status()
            data = resp.json()
        except (RequestException, ValueError) as e:
            logger.error(f"Error cargando productos: {e}")
            raise CatalogFetchFailure("Error cargando productos") from e

        if not isinstance(data, list):
            raise CatalogFetchFailure("Respuesta de catalogo invalida")
        return data

    def create_order(self, payload: dict, idempotency_key: str | None = None) -> OrderCreated:
        url = f"{self.base_url}/orders"
        headers = {"Idempotency-Key": idempotency_key} if idempotency_key else {}
        logger.info(f"StorefrontClient POST {url}")

        try:
            resp = self.http.post(url, json=payload, headers=headers, timeout=self.timeout)
            resp.raise_for_status()
            return OrderCreated.model_validate(resp.json())
        except (RequestException, ValueError) as e:
            #pydantic ValidationError is a ValueError too
            logger.error(f"Error creando orden: {e}")
            raise OrderSubmissionFailure(f"Error creando orden: {e}") from e

    @http_retry()
    def get_notifications(self) -> AdminNotifications:
        url = f"{self.base_url}/admin/notificaciones"
        logger.debug(f"StorefrontClient GET {url}")

        resp = self.http.get(url, timeout=self.timeout)
        resp.raise_for_status()
        return AdminNotifications.model_validate(resp.json())

    @http_retry()
    def mark_seen(self, order_id: int) -> None:
        url = f"{self.base_url}/admin/notificaciones/visto/{order_id}"
        logger.info(f"StorefrontClient POST {url}")

        resp = self.http.post(url, timeout=self.timeout)
        resp.raise_for_status()
