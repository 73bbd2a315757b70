from pathlib import Path

from fastapi import Request
from fastapi.templating import Jinja2Templates

TEMPLATES_DIR = Path(__file__).parent.parent / "templates"


def create_templates(directory: str | Path = TEMPLATES_DIR) -> Jinja2Templates:
    return Jinja2Templates(directory=str(directory))


def get_templates(request: Request) -> Jinja2Templates:
    """FastAPI dependency returning the app's template environment."""
    return request.app.state.templates
