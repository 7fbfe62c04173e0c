# /app/services/record_helpers/livingapps_repository.py

"""
Reads record collections from the Living Apps record-storage REST service.

Each collection is one app on the service; `GET /apps/{app_id}/records`
returns the whole collection, either as an object keyed by record id or as
a plain list of records.
"""

import logging
from typing import Any, Dict, List, Optional

import requests

from ...core import config
from .base_repository import BaseRecordRepository, RecordSourceError

logger = logging.getLogger(__name__)


class LivingAppsRepository(BaseRecordRepository):
    def __init__(
        self,
        base_url: Optional[str] = None,
        api_key: Optional[str] = None,
        app_ids: Optional[Dict[str, str]] = None,
        timeout: Optional[float] = None
    ):
        self.base_url = (base_url or config.LIVINGAPPS_BASE_URL).rstrip("/")
        self.api_key = api_key if api_key is not None else config.LIVINGAPPS_API_KEY
        self.app_ids = app_ids or config.APP_IDS
        self.timeout = timeout if timeout is not None else config.LIVINGAPPS_TIMEOUT

    def _headers(self) -> Dict[str, str]:
        headers = {"Accept": "application/json"}
        if self.api_key:
            headers["X-API-Key"] = self.api_key
        return headers

    def records_url(self, collection: str) -> str:
        return f"{self.base_url}/apps/{self.app_ids[collection]}/records"

    def _load_raw(self, collection: str) -> List[Dict[str, Any]]:
        url = self.records_url(collection)
        logger.debug(f"Fetching '{collection}' from {url}")
        try:
            resp = requests.get(url, headers=self._headers(), timeout=self.timeout)
            resp.raise_for_status()
            payload = resp.json()
        except requests.RequestException as e:
            raise RecordSourceError(collection, str(e)) from e
        except ValueError as e:
            raise RecordSourceError(collection, f"response is not valid JSON: {e}") from e
        return _normalize_payload(collection, payload)


def _normalize_payload(collection: str, payload: Any) -> List[Dict[str, Any]]:
    """Turns either response shape into a list of record dictionaries."""
    if isinstance(payload, list):
        return payload
    if isinstance(payload, dict):
        records = []
        for record_id, record in payload.items():
            if not isinstance(record, dict):
                raise RecordSourceError(collection, f"record '{record_id}' is not an object")
            records.append({"record_id": record_id, **record})
        return records
    raise RecordSourceError(collection, f"unexpected payload type {type(payload).__name__}")
