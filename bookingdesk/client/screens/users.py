from bookingdesk.client.controller import ResourceHandle
from bookingdesk.client.screens.base import BaseScreen
from bookingdesk.client.services.users import UsersService
from bookingdesk.core.constants import USER_STATUS_LABELS


class UsersScreen(BaseScreen):
    """Admin user table with search, paging, selection and bulk actions."""

    def __init__(self, app) -> None:
        super().__init__(app)
        self.service = UsersService(app)

    def enter(self) -> list[ResourceHandle]:
        return [self.service.start()]

    def exit(self) -> None:
        self.service.stop()

    def refresh(self) -> None:
        self.service.refresh()

    async def handle_command(self, command: str, argument: str) -> None:
        match command:
            case "n":
                if not self.service.next_page():
                    self.message = "Already on the last page"
            case "p":
                if not self.service.previous_page():
                    self.message = "Already on the first page"
            case "s":
                self.service.search(argument)
            case "x" if not argument:
                await super().handle_command(command, argument)
            case "x":
                if argument == "all":
                    self.service.select_all()
                elif argument in self.service.selected:
                    self.service.deselect(argument)
                else:
                    self.service.select(argument)
            case "delete" | "activate" | "deactivate":
                result = await self.service.bulk_action(command)
                self.message = result.message
            case _:
                await super().handle_command(command, argument)

    def render(self) -> str:
        title = self.labels["users_title"]
        if self.service.search_term:
            title = f"{title}  (search: {self.service.search_term})"

        users = self.service.users
        if self.service.handle is None or (not users and self.service.is_loading):
            return f"{title}\n\n{self.labels['loading']}"
        if self.service.pagination is None and self.service.error:
            return f"{title}\n\n{self.labels['load_error']}: {self.service.error} ({self.labels['retry']})"

        status_labels = USER_STATUS_LABELS[self.app.settings.language]
        lines = [title, ""]
        if not users:
            lines.append(f"  {self.labels['no_users']}")
        for user in users:
            mark = "[x]" if user.id in self.service.selected else "[ ]"
            lines.append(
                f"{mark} {user.email:<32} {user.first_name or '-':<12} {user.last_name or '-':<12} "
                f"{user.role:<14} {status_labels.get(user.status, user.status)}"
            )

        window = self.service.window
        if window is not None:
            lines += ["", window.describe()]
        if self.service.selected:
            lines.append(f"{len(self.service.selected)} selected")
        if self.service.error:
            lines += ["", f"{self.labels['load_error']}: {self.service.error}"]
        return "\n".join(lines)
