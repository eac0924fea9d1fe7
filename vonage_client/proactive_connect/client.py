"""
vonage_client/proactive_connect/client.py

WHAT THIS FILE IS FOR
---------------------
Façade for the Proactive Connect bulk API, rooted at
{api_eu_base_url}/v0.1/bulk.

    lists     create / get / update / delete / clear / fetch / list
    items     create / get / update / delete / list / download CSV / import CSV
    events    list

Accepted auth: JWT.

LIST OPERATIONS
---------------
Each paged resource has two forms:
- list_lists() / list_items(list_id)
    first page of up to 1000 entries, unwrapped to a plain list
    (None when the response has no embedded collection)
- list_lists_page(...) / list_items_page(...)
    the full HAL page, for callers that walk pages themselves

Page arguments are checked (page >= 1, 1 <= page_size <= 1000) before
any request is sent.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import structlog

from vonage_client.common.endpoint import BODY_JSON, BODY_MULTIPART, ResourceClient
from vonage_client.common.exceptions import (
    ProactiveConnectResponseException,
    VonageClientException,
    VonageUnexpectedException,
)
from vonage_client.common.pagination import HalFilterRequest, SortOrder, embedded_collection
from vonage_client.common.validation import require, validate_uuid
from vonage_client.proactive_connect.schemas import (
    DEFAULT_PAGE,
    DEFAULT_PAGE_SIZE,
    ContactsList,
    Event,
    ListEventsFilter,
    ListEventsResponse,
    ListItem,
    ListItemsResponse,
    ListListsResponse,
    UploadListItemsResponse,
)
from vonage_client.utils.auth import AuthCollection, JwtAuth
from vonage_client.utils.http_client import HttpClient

logger = structlog.get_logger(__name__)

CSV_CONTENT = "text/csv"


class ProactiveConnectClient(ResourceClient):
    AUTH_METHODS = (JwtAuth,)
    EXCEPTION_TYPE = ProactiveConnectResponseException

    def __init__(self, http: HttpClient, auth: AuthCollection, base_url: str) -> None:
        super().__init__(http, auth, f"{base_url.rstrip('/')}/v0.1/bulk")

        self._create_list = self._endpoint("POST", "/lists", body=BODY_JSON, response_type=ContactsList)
        self._get_list = self._endpoint("GET", "/lists/{list_id}", response_type=ContactsList)
        self._update_list = self._endpoint("PUT", "/lists/{list_id}", body=BODY_JSON, response_type=ContactsList)
        self._delete_list = self._endpoint("DELETE", "/lists/{list_id}")
        self._clear_list = self._endpoint("POST", "/lists/{list_id}/clear")
        self._fetch_list = self._endpoint("POST", "/lists/{list_id}/fetch")
        self._list_lists = self._endpoint("GET", "/lists", response_type=ListListsResponse)

        self._list_items = self._endpoint("GET", "/lists/{list_id}/items", response_type=ListItemsResponse)
        self._create_item = self._endpoint("POST", "/lists/{list_id}/items", body=BODY_JSON, response_type=ListItem)
        self._get_item = self._endpoint("GET", "/lists/{list_id}/items/{item_id}", response_type=ListItem)
        self._update_item = self._endpoint(
            "PUT", "/lists/{list_id}/items/{item_id}", body=BODY_JSON, response_type=ListItem
        )
        self._delete_item = self._endpoint("DELETE", "/lists/{list_id}/items/{item_id}")
        self._download_items = self._endpoint(
            "GET", "/lists/{list_id}/items/download", response_type=bytes, accept=CSV_CONTENT
        )
        self._upload_items = self._endpoint(
            "POST", "/lists/{list_id}/items/import", body=BODY_MULTIPART, response_type=UploadListItemsResponse
        )

        self._list_events = self._endpoint("GET", "/events", response_type=ListEventsResponse)

    # ------------------------------------------------------------------
    # Lists
    # ------------------------------------------------------------------
    def create_list(self, contacts_list: ContactsList) -> ContactsList:
        require(contacts_list.name, "name")
        return self._create_list.execute(contacts_list)

    def get_list(self, list_id) -> ContactsList:
        return self._get_list.execute(path=_list_path(list_id))

    def update_list(self, list_id, contacts_list: ContactsList) -> ContactsList:
        return self._update_list.execute(contacts_list, path=_list_path(list_id))

    def delete_list(self, list_id) -> None:
        self._delete_list.execute(path=_list_path(list_id))

    def clear_list(self, list_id) -> None:
        """Delete every item in the list, keeping the list itself."""
        self._clear_list.execute(path=_list_path(list_id))

    def fetch_list(self, list_id) -> None:
        """Replace the list's items with a fresh copy from its datasource."""
        self._fetch_list.execute(path=_list_path(list_id))

    def list_lists(self) -> Optional[List[ContactsList]]:
        return embedded_collection(self.list_lists_page(), "lists")

    def list_lists_page(
        self,
        page: int = DEFAULT_PAGE,
        page_size: int = DEFAULT_PAGE_SIZE,
        order: Optional[SortOrder] = None,
    ) -> ListListsResponse:
        return self._list_lists.execute(query=HalFilterRequest(page=page, page_size=page_size, order=order))

    # ------------------------------------------------------------------
    # Items
    # ------------------------------------------------------------------
    def list_items(self, list_id) -> Optional[List[ListItem]]:
        return embedded_collection(self.list_items_page(list_id), "items")

    def list_items_page(
        self,
        list_id,
        page: int = DEFAULT_PAGE,
        page_size: int = DEFAULT_PAGE_SIZE,
        order: Optional[SortOrder] = None,
    ) -> ListItemsResponse:
        query = HalFilterRequest(page=page, page_size=page_size, order=order)
        return self._list_items.execute(path=_list_path(list_id), query=query)

    def create_list_item(self, list_id, data: Dict[str, Any]) -> ListItem:
        if not data:
            raise ValueError("data is required")
        return self._create_item.execute(ListItem(data=data), path=_list_path(list_id))

    def get_list_item(self, list_id, item_id) -> ListItem:
        return self._get_item.execute(path=_item_path(list_id, item_id))

    def update_list_item(self, list_id, item_id, data: Dict[str, Any]) -> ListItem:
        if not data:
            raise ValueError("data is required")
        return self._update_item.execute(ListItem(data=data), path=_item_path(list_id, item_id))

    def delete_list_item(self, list_id, item_id) -> None:
        self._delete_item.execute(path=_item_path(list_id, item_id))

    def download_list_items(self, list_id, file: Union[str, Path, None] = None) -> Optional[bytes]:
        """
        Export every item of a list as CSV.

        Returns the raw CSV bytes, or writes them to `file` and returns None.
        """
        content = self._download_items.execute(path=_list_path(list_id))
        if file is None:
            return content
        target = Path(file)
        try:
            target.write_bytes(content)
        except OSError as exc:
            raise VonageUnexpectedException(f"Couldn't write list '{list_id}' to file '{target}'") from exc
        logger.info("proactive_connect_list_downloaded", list_id=str(list_id), file=str(target), size=len(content))
        return None

    def upload_list_items(self, list_id, csv_file: Union[str, Path]) -> UploadListItemsResponse:
        path = _list_path(list_id)
        source = Path(csv_file)
        try:
            data = source.read_bytes()
        except OSError as exc:
            raise VonageClientException(f"Could not read from file '{source}'") from exc
        files = {"file": (source.name, data, CSV_CONTENT)}
        return self._upload_items.execute(files, path=path)

    # ------------------------------------------------------------------
    # Events
    # ------------------------------------------------------------------
    def list_events(self, filter: Optional[ListEventsFilter] = None) -> Optional[List[Event]]:
        page = self._list_events.execute(query=filter or ListEventsFilter())
        return embedded_collection(page, "events")


def _list_path(list_id) -> Dict[str, str]:
    return {"list_id": validate_uuid(list_id, "list_id")}


def _item_path(list_id, item_id) -> Dict[str, str]:
    return {"list_id": validate_uuid(list_id, "list_id"), "item_id": validate_uuid(item_id, "item_id")}
