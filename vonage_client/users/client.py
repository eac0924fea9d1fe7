"""
vonage_client/users/client.py

Façade for the Users API ({api_base_url}/v1/users), JWT auth.

    GET    /v1/users              list_users() / list_users_page()
    POST   /v1/users              create_user()
    GET    /v1/users/{user_id}    get_user()
    PATCH  /v1/users/{user_id}    update_user()
    DELETE /v1/users/{user_id}    delete_user()
"""

from __future__ import annotations

from typing import List, Optional

from vonage_client.common.endpoint import BODY_JSON, ResourceClient
from vonage_client.common.exceptions import UsersResponseException
from vonage_client.common.pagination import embedded_collection
from vonage_client.users.schemas import ListUsersRequest, ListUsersResponse, User, validate_user_id
from vonage_client.utils.auth import AuthCollection, JwtAuth
from vonage_client.utils.http_client import HttpClient


class UsersClient(ResourceClient):
    AUTH_METHODS = (JwtAuth,)
    EXCEPTION_TYPE = UsersResponseException

    def __init__(self, http: HttpClient, auth: AuthCollection, base_url: str) -> None:
        super().__init__(http, auth, f"{base_url.rstrip('/')}/v1/users")
        self._list = self._endpoint("GET", "", response_type=ListUsersResponse)
        self._create = self._endpoint("POST", "", body=BODY_JSON, response_type=User)
        self._get = self._endpoint("GET", "/{user_id}", response_type=User)
        self._update = self._endpoint("PATCH", "/{user_id}", body=BODY_JSON, response_type=User)
        self._delete = self._endpoint("DELETE", "/{user_id}")

    def list_users(self) -> Optional[List[User]]:
        """First page of users, unwrapped; None when the response embeds no collection."""
        return embedded_collection(self.list_users_page(), "users")

    def list_users_page(self, request: Optional[ListUsersRequest] = None) -> ListUsersResponse:
        return self._list.execute(query=request)

    def create_user(self, user: Optional[User] = None) -> User:
        """Every field is optional; the server generates a name when none is given."""
        return self._create.execute(user or User())

    def get_user(self, user_id: str) -> User:
        return self._get.execute(path={"user_id": validate_user_id(user_id)})

    def update_user(self, user_id: str, user: User) -> User:
        if user is None:
            raise ValueError("user is required")
        return self._update.execute(user, path={"user_id": validate_user_id(user_id)})

    def delete_user(self, user_id: str) -> None:
        self._delete.execute(path={"user_id": validate_user_id(user_id)})
