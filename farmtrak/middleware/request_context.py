from __future__ import annotations

import logging
import time
from typing import Any, Awaitable, Callable

from fastapi import Request

logger = logging.getLogger(__name__)


async def request_context_middleware(
    request: Request,
    call_next: Callable[[Request], Awaitable[Any]],
):
    """
    Middleware de contexto (não-enforcement):

    - Inicia request.state.account / resource / parent vazios
    - NÃO decodifica token e NÃO bloqueia a request
      (o enforcement real fica nas dependencies: get_current_account(), require_*()).
    - Ao final (sucesso ou erro) registra uma linha de acesso e descarta o contexto.
    """
    request.state.account = None
    request.state.resource = None
    request.state.parent = None
    started = time.perf_counter()
    status_code = 500
    try:
        response = await call_next(request)
        status_code = response.status_code
        return response
    finally:
        account = getattr(request.state, "account", None)
        logger.info(
            "%s %s -> %s (%.1f ms) account=%s",
            request.method,
            request.url.path,
            status_code,
            (time.perf_counter() - started) * 1000,
            account.id if account is not None else "-",
        )
        request.state.account = None
        request.state.resource = None
        request.state.parent = None
