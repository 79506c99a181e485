"""user.list - paginated identity listing."""

from typing import Literal

from pydantic import BaseModel, Field

from actiongate.application.actions import ActionHandler
from actiongate.application.dto.caller import Caller
from actiongate.application.response_formatter import paginate
from actiongate.application.use_cases.user.serializers import identity_to_dict


class ListUsersParams(BaseModel):
    page: int = Field(default=1, ge=1)
    per_page: int = Field(default=15, ge=1, le=100)
    search: str | None = Field(default=None, max_length=255)
    sort_by: Literal["id", "name", "email", "created_at", "updated_at"] = "created_at"
    sort_order: Literal["asc", "desc"] = "desc"


class ListUsersAction(ActionHandler):
    action_type = "user.list"
    name = "List users"
    description = "Paginated user list with search (name/email) and sorting"
    required_permissions = frozenset({"user.list"})
    params_model = ListUsersParams
    examples = [
        {"title": "First page", "request": {"action_type": "user.list"}},
        {
            "title": "Search",
            "request": {"action_type": "user.list", "search": "ada", "per_page": 10},
        },
    ]

    async def execute(self, params: ListUsersParams, caller: Caller) -> dict:
        async with self._uow_factory() as uow:
            identities, total = await uow.identities.list(
                search=params.search,
                sort_by=params.sort_by,
                descending=params.sort_order == "desc",
                offset=(params.page - 1) * params.per_page,
                limit=params.per_page,
            )
        return {
            "users": [identity_to_dict(i) for i in identities],
            "pagination": paginate(
                identities, page=params.page, per_page=params.per_page, total=total
            ),
        }
