"""Crawler files: robots.txt and sitemap.xml."""

from datetime import date

from fastapi import APIRouter, Depends, Request
from fastapi.responses import PlainTextResponse, Response
from fastapi.templating import Jinja2Templates

from runtime_dynamics.web.templating import get_templates

router = APIRouter()

# (path, changefreq, priority)
SITEMAP_PAGES = [
    ("/", "weekly", "1.0"),
    ("/features", "weekly", "0.8"),
    ("/about", "monthly", "0.7"),
    ("/help", "weekly", "0.6"),
    ("/contact", "monthly", "0.6"),
    ("/privacy", "yearly", "0.3"),
    ("/terms", "yearly", "0.3"),
    ("/cookies", "yearly", "0.3"),
]

ROBOTS_TXT = """User-agent: *
Allow: /
Disallow: /app/
Disallow: /api/
Disallow: /desktop-login

Sitemap: {base_url}/sitemap.xml
"""


def base_url(request: Request) -> str:
    """Scheme and host the request was addressed to, e.g. https://example.com"""
    scheme = "https" if request.url.scheme in ("https", "wss") else "http"
    host = request.headers.get("host") or request.url.netloc
    return f"{scheme}://{host}"


@router.get("/robots.txt", response_class=PlainTextResponse, include_in_schema=False)
async def robots_txt(request: Request):
    return PlainTextResponse(ROBOTS_TXT.format(base_url=base_url(request)))


@router.get("/sitemap.xml", include_in_schema=False)
async def sitemap_xml(request: Request, templates: Jinja2Templates = Depends(get_templates)):
    content = templates.get_template("sitemap.xml").render(
        base_url=base_url(request),
        lastmod=date.today().isoformat(),
        pages=SITEMAP_PAGES,
    )
    return Response(content=content, media_type="application/xml")
