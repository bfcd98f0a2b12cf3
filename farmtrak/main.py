import logging
import traceback

from fastapi import FastAPI
from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.exc import IntegrityError
from starlette.exceptions import HTTPException as StarletteHTTPException

from farmtrak.api.route import router
from farmtrak.auth.errors import AuthError
from farmtrak.config import settings
from farmtrak.middleware.request_context import request_context_middleware
from farmtrak.model.base import utc_now

logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(
    title="FarmTrak API",
    description="API para gestão de fazendas: rebanho, culturas, vendas e saúde animal",
    version="1.0.0",
)

# Configuração CORS (CORS_ORIGINS separado por vírgula)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def _request_context(request: Request, call_next):
    return await request_context_middleware(request, call_next)


app.include_router(router)


def _error_payload(
    request: Request,
    *,
    code: str,
    message: str,
    details: object | None = None,
    debug: dict | None = None,
) -> dict:
    payload: dict = {
        "error": {
            "code": code,
            "message": message,
            "timestamp": utc_now().isoformat().replace("+00:00", "Z"),
            "path": request.url.path,
            "method": request.method,
        }
    }
    if details is not None:
        payload["error"]["details"] = details
    # Diagnóstico só em desenvolvimento; nunca em produção.
    if debug is not None and settings.is_development:
        payload["error"]["debug"] = debug
    return payload


@app.exception_handler(AuthError)
async def auth_exception_handler(request: Request, exc: AuthError):
    logger.info("%s %s rejeitada: %s", request.method, request.url.path, exc.kind.value)
    return JSONResponse(
        status_code=exc.status_code,
        content=_error_payload(
            request,
            code=exc.kind.value,
            message=exc.message,
            debug={"detail": exc.detail} if exc.detail else None,
        ),
        headers=exc.headers,
    )


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    # Normaliza erros HTTP do FastAPI/Starlette para um payload consistente.
    code = f"HTTP_{exc.status_code}"
    message = exc.detail if isinstance(exc.detail, str) else "Request failed"
    return JSONResponse(
        status_code=exc.status_code,
        content=_error_payload(request, code=code, message=message),
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    # Normaliza erros de validação (422) para payload consistente.
    return JSONResponse(
        status_code=422,
        content=_error_payload(
            request,
            code="VALIDATION_ERROR",
            message="Invalid request",
            details=jsonable_encoder(exc.errors()),
        ),
    )


@app.exception_handler(IntegrityError)
async def integrity_exception_handler(request: Request, exc: IntegrityError):
    logger.warning("Violação de integridade em %s %s: %s", request.method, request.url.path, exc.orig)
    return JSONResponse(
        status_code=409,
        content=_error_payload(
            request,
            code="CONFLICT",
            message="Resource conflict",
            debug={"detail": str(exc.orig)},
        ),
    )


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    # Loga o erro completo para debug
    logger.error(f"Erro não tratado: {exc}", exc_info=True)

    # Em produção não expõe mensagem nem stacktrace
    return JSONResponse(
        status_code=500,
        content=_error_payload(
            request,
            code="INTERNAL_ERROR",
            message="Internal server error",
            debug={
                "type": type(exc).__name__,
                "detail": str(exc)[:500],
                "stack": traceback.format_exception(type(exc), exc, exc.__traceback__),
            },
        ),
    )
