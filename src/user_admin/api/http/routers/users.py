"""User management pages: list, create, edit and delete."""

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import HTMLResponse, RedirectResponse
from fastapi.templating import Jinja2Templates
from starlette.datastructures import FormData

from src.user_admin.api.http.deps import get_form_data, get_templates, get_user_service
from src.user_admin.api.http.forms import user_from_form
from src.user_admin.core.exceptions import InvalidUserIdError
from src.user_admin.core.services import UserService
from src.user_admin.entities.core.user import User

router = APIRouter(prefix="/users", tags=["users"])


def _redirect_to_list(request: Request) -> RedirectResponse:
    # Relative path, so the Location never depends on the Host header
    return RedirectResponse(
        url=request.app.url_path_for("list_users"), status_code=status.HTTP_302_FOUND
    )


@router.get("", response_class=HTMLResponse, name="list_users")
def list_users(
    request: Request,
    user_service: UserService = Depends(get_user_service),
    templates: Jinja2Templates = Depends(get_templates),
):
    """Render all users together with an empty creation form."""
    return templates.TemplateResponse(
        request,
        "users.html",
        {"users": user_service.get_all_users(), "user": User()},
    )


@router.post("", name="add_user")
def add_user(
    request: Request,
    form: FormData = Depends(get_form_data),
    user_service: UserService = Depends(get_user_service),
) -> RedirectResponse:
    user_service.save_user(user_from_form(form))
    return _redirect_to_list(request)


@router.get("/edit/{user_id}", response_class=HTMLResponse, name="show_update_form")
def show_update_form(
    user_id: int,
    request: Request,
    user_service: UserService = Depends(get_user_service),
    templates: Jinja2Templates = Depends(get_templates),
):
    """Render the edit form for an existing user."""
    user = user_service.get_user_by_id(user_id)
    if user is None:
        raise InvalidUserIdError(user_id)
    return templates.TemplateResponse(request, "update-user.html", {"user": user})


@router.post("/update/{user_id}", name="update_user")
def update_user(
    user_id: int,
    request: Request,
    form: FormData = Depends(get_form_data),
    user_service: UserService = Depends(get_user_service),
) -> RedirectResponse:
    """Overwrite the user at the path id; the path id wins over any body id."""
    user_service.save_user(user_from_form(form, user_id=user_id))
    return _redirect_to_list(request)


@router.get("/delete/{user_id}", name="delete_user")
def delete_user(
    user_id: int,
    request: Request,
    user_service: UserService = Depends(get_user_service),
) -> RedirectResponse:
    user_service.delete_user(user_id)
    return _redirect_to_list(request)
