# storefront/utils/retry.py
from tenacity import retry, stop_after_attempt, wait_exponential, retry_if_exception, retry_if_exception_type
import requests
import redis

from storefront.utils.settings import HTTP_RETRY_ATTEMPTS, REDIS_RETRY_ATTEMPTS


def _is_transient(exc: BaseException) -> bool:
    #4xx is our fault, retrying won't help
    if isinstance(exc, requests.HTTPError):
        return exc.response is not None and exc.response.status_code >= 500
    return isinstance(exc, (requests.ConnectionError, requests.Timeout))


#only for idempotent calls, order creation is never retried
def http_retry():
    return retry(
        reraise=True,
        stop=stop_after_attempt(HTTP_RETRY_ATTEMPTS),
        wait=wait_exponential(multiplier=0.3, min=0.3, max=3),
        retry=retry_if_exception(_is_transient),
    )


def redis_retry():
    return retry(
        reraise=True,
        stop=stop_after_attempt(REDIS_RETRY_ATTEMPTS),
        wait=wait_exponential(multiplier=0.2, min=0.2, max=2),
        retry=retry_if_exception_type(redis.ConnectionError),
    )
