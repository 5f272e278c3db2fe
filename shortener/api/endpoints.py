"""
FastAPI Endpoints for URL Shortener Service

This module defines the REST API endpoints with minimal logic.
Endpoints only handle:
- Request parsing (Pydantic models)
- Building the public short URL and the redirect response
- Delegating to the service layer

Service errors are raised through to the exception handlers in
shortener.api.errors, which render them as {"error": ...} bodies.
"""

from urllib.parse import quote

from fastapi import APIRouter, Depends, Request, Response, status
from fastapi.responses import JSONResponse

from shortener.api.schemas import ErrorResponse, ShortenRequest, ShortenResponse
from shortener.core.setting import Settings
from shortener.core.validators import is_well_formed_short_code
from shortener.services.url_service import URLShorteningService

NOT_FOUND_MESSAGE = "Short URL not found"

router = APIRouter()


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_url_service(request: Request) -> URLShorteningService:
    return request.app.state.url_service


def build_short_url(base_url: str, short_code: str) -> str:
    """Join the configured base URL and a short code."""
    return f"{base_url.rstrip('/')}/{short_code}"


def _is_header_safe(char: str) -> bool:
    # Printable latin-1; excludes C0/C1 controls (CR, LF among them) and DEL
    code_point = ord(char)
    return 0x20 <= code_point < 0x7F or 0xA0 <= code_point <= 0xFF


def header_safe_url(url: str) -> str:
    """
    Return url unchanged except for characters a header value cannot carry.

    Those are percent-encoded (as UTF-8); everything else, including spaces,
    braces and latin-1 letters, is sent exactly as stored.
    """
    return "".join(
        char if _is_header_safe(char) else quote(char, safe="")
        for char in url
    )


@router.post(
    "/shorten",
    response_model=ShortenResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        400: {"model": ErrorResponse, "description": "Invalid URL"},
        500: {"model": ErrorResponse, "description": "Storage failure"},
    },
    summary="Create a short URL",
    description="Takes a long URL and returns a shortened version with a unique code"
)
async def create_short_url(
    body: ShortenRequest,
    url_service: URLShorteningService = Depends(get_url_service),
    settings: Settings = Depends(get_settings),
) -> ShortenResponse:
    """
    Create a new short URL from a long URL.

    Returns:
        ShortenResponse with short_url and original_url
    """
    result = await url_service.create(body.url)

    return ShortenResponse(
        short_url=build_short_url(settings.BASE_URL, result.short_code),
        original_url=result.original_url
    )


@router.get(
    "/{short_code}",
    status_code=status.HTTP_302_FOUND,
    responses={
        404: {"model": ErrorResponse, "description": "Unknown short code"},
        500: {"model": ErrorResponse, "description": "Storage failure"},
    },
    summary="Redirect to original URL",
    description="Takes a short code and redirects to the original long URL"
)
async def redirect_to_url(
    short_code: str,
    url_service: URLShorteningService = Depends(get_url_service),
):
    """
    Redirect to the original URL for a given short code.

    Codes containing anything other than base62 characters cannot exist,
    so they are answered with 404 without a database lookup.

    Returns:
        HTTP 302 with Location set to the stored URL, or a 404 JSON body
    """
    original_url = None
    if is_well_formed_short_code(short_code):
        original_url = await url_service.resolve(short_code)

    if original_url is None:
        return JSONResponse(
            status_code=status.HTTP_404_NOT_FOUND,
            content={"error": NOT_FOUND_MESSAGE}
        )

    return Response(
        status_code=status.HTTP_302_FOUND,
        headers={"Location": header_safe_url(original_url)}
    )
