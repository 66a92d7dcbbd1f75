from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from pydantic import ValidationError

from bookingdesk.client.api import FetchError
from bookingdesk.client.controller import ResourceHandle
from bookingdesk.client.services.base import ServiceBase
from bookingdesk.core.constants import (
    BULK_CONFIRM_MESSAGES,
    DELETE_CONFIRM_MESSAGE,
    USERS_BULK_ENDPOINT,
    USERS_ENDPOINT,
)
from bookingdesk.core.models.network import FetchStatus, ResourceRequest
from bookingdesk.core.models.pagination import (
    PageWindow,
    PaginationCursor,
    PaginationResult,
    page_window,
)
from bookingdesk.core.models.user import BulkActionRequest, User, UserForm
from bookingdesk.core.types import BulkAction, HttpMethod

if TYPE_CHECKING:
    from bookingdesk.client.app import ClientApp

logger = logging.getLogger(__name__)


@dataclass
class MutationResult:
    success: bool
    message: str


def parse_users(payload: Any) -> list[User]:
    return [User.model_validate(item) for item in payload]


class UsersService(ServiceBase):
    """Paginated, searchable admin user list with CRUD and bulk actions."""

    def __init__(self, app: ClientApp) -> None:
        super().__init__(app)
        self.handle: ResourceHandle | None = None
        self.cursor = PaginationCursor(page=1, limit=app.settings.page_limit)
        self.search_term = ""
        self.selected: list[str] = []

    def build_request(self) -> ResourceRequest:
        params: dict[str, str | int] = self.cursor.as_params()
        if self.search_term:
            params["search"] = self.search_term
        return ResourceRequest(
            key="users:admin",
            endpoint=USERS_ENDPOINT,
            context=self.context,
            resource_name="users",
            params=params,
        )

    def start(self) -> ResourceHandle:
        if self.handle is not None and not self.handle.stopped:
            return self.handle
        self.handle = self.app.controller.start(self.build_request(), parse=parse_users)
        return self.handle

    def stop(self) -> None:
        if self.handle is not None:
            self.handle.stop()

    def refresh(self) -> None:
        if self.handle is None:
            self.start()
            return
        self.handle.refresh()

    # State
    @property
    def users(self) -> list[User]:
        if self.handle is None or self.handle.data is None:
            return []
        return self.handle.data

    @property
    def pagination(self) -> PaginationResult | None:
        return self.handle.pagination if self.handle else None

    @property
    def window(self) -> PageWindow | None:
        """Item range of the list currently shown, from the request that produced it."""
        if self.handle is None or self.handle.pagination is None:
            return None
        shown = self.handle.state.request
        page = int(shown.params.get("page", 1)) if shown else self.cursor.page
        return page_window(page, self.handle.pagination)

    @property
    def is_loading(self) -> bool:
        return self.handle is not None and self.handle.status == FetchStatus.LOADING

    @property
    def error(self) -> str | None:
        if self.handle is None or self.handle.status != FetchStatus.FAILED:
            return None
        return self._error_message(self.handle.error_kind, self.handle.error)

    # Navigation
    def search(self, term: str) -> None:
        """Filter by ``term`` and go back to the first page."""
        self.search_term = term.strip()
        self.cursor = PaginationCursor(page=1, limit=self.cursor.limit)
        self.selected = []
        if self.handle is not None:
            self.handle.update_request(page=1, search=self.search_term or None)

    def go_to_page(self, page: int) -> None:
        self.cursor = PaginationCursor(page=page, limit=self.cursor.limit)
        if self.handle is not None:
            self.handle.update_request(page=page)

    def next_page(self) -> bool:
        pagination = self.pagination
        if pagination is None or self.cursor.page >= pagination.total_pages:
            return False
        self.go_to_page(self.cursor.page + 1)
        return True

    def previous_page(self) -> bool:
        if self.cursor.page <= 1:
            return False
        self.go_to_page(self.cursor.page - 1)
        return True

    # Selection
    def select(self, user_id: str) -> None:
        if user_id not in self.selected:
            self.selected.append(user_id)

    def deselect(self, user_id: str) -> None:
        self.selected = [uid for uid in self.selected if uid != user_id]

    def select_all(self) -> None:
        self.selected = [user.id for user in self.users]

    def clear_selection(self) -> None:
        self.selected = []

    @property
    def all_selected(self) -> bool:
        return bool(self.users) and len(self.selected) == len(self.users)

    # Mutations
    async def create_user(self, form: UserForm | dict) -> MutationResult:
        try:
            form = form if isinstance(form, UserForm) else UserForm.model_validate(form)
        except ValidationError as e:
            return MutationResult(False, self._validation_message(e))
        if not form.password:
            return MutationResult(False, "Password must be at least 6 characters")

        return await self._mutate(
            "POST", USERS_ENDPOINT, form.to_payload(), "User created successfully", "Failed to create user"
        )

    async def update_user(self, user_id: str, form: UserForm | dict) -> MutationResult:
        try:
            form = form if isinstance(form, UserForm) else UserForm.model_validate(form)
        except ValidationError as e:
            return MutationResult(False, self._validation_message(e))

        return await self._mutate(
            "PUT",
            f"{USERS_ENDPOINT}/{user_id}",
            form.to_payload(),
            "User updated successfully",
            "Failed to update user",
        )

    async def delete_user(self, user_id: str) -> MutationResult:
        if not await self.app.confirmer(DELETE_CONFIRM_MESSAGE):
            return MutationResult(False, "Cancelled")

        result = await self._mutate(
            "DELETE", f"{USERS_ENDPOINT}/{user_id}", None, "User deleted successfully", "Failed to delete user"
        )
        if result.success:
            self.deselect(user_id)
        return result

    async def bulk_action(self, action: BulkAction) -> MutationResult:
        if not self.selected:
            return MutationResult(False, "Please select users first")

        message = BULK_CONFIRM_MESSAGES[action].format(count=len(self.selected))
        if not await self.app.confirmer(message):
            return MutationResult(False, "Cancelled")

        body = BulkActionRequest(action=action, user_ids=self.selected).model_dump(by_alias=True)
        result = await self._mutate(
            "POST",
            USERS_BULK_ENDPOINT,
            body,
            f"{action} operation completed successfully",
            f"Failed to {action} users",
        )
        if result.success:
            self.clear_selection()
        return result

    async def _mutate(
        self, method: HttpMethod, endpoint: str, body: dict | None, ok_message: str, fail_message: str
    ) -> MutationResult:
        try:
            await self.app.api_client.send(method, endpoint, self.context, body)
        except FetchError as e:
            logger.error(f"{fail_message}: {e.message}")
            detail = e.message if e.status_code and e.status_code < 500 else None
            return MutationResult(False, detail or fail_message)

        logger.info(ok_message)
        self.refresh()
        return MutationResult(True, ok_message)

    @staticmethod
    def _validation_message(error: ValidationError) -> str:
        first = error.errors()[0]
        field = ".".join(str(part) for part in first.get("loc", ()))
        return f"{field}: {first['msg']}" if field else first["msg"]
