from fastapi import APIRouter, Depends, Request
from fastapi.responses import HTMLResponse
from fastapi.templating import Jinja2Templates

from runtime_dynamics.core.config import Settings, get_settings
from runtime_dynamics.web.templating import get_templates

router = APIRouter()


@router.get("/", response_class=HTMLResponse, include_in_schema=False)
async def home_page(
    request: Request,
    templates: Jinja2Templates = Depends(get_templates),
    settings: Settings = Depends(get_settings),
):
    """Render the homepage."""
    return templates.TemplateResponse(
        request,
        "pages/home.html",
        {"frontend_endpoint": settings.FRONTEND_ENDPOINT},
    )
