from __future__ import annotations

import json
import logging

from django.http import JsonResponse
from django.views.decorators.csrf import csrf_exempt
from django.views.decorators.http import require_GET, require_POST

from .apps import get_game
from .services.catalog import SEARCH_LIMIT
from .services.daily import CatalogoVacioError
from .services.game_service import PeliculaDesconocidaError

logger = logging.getLogger(__name__)


def _error(msg: str, status: int) -> JsonResponse:
    return JsonResponse({"error": msg}, status=status, json_dumps_params={"ensure_ascii": False})


def _fecha_param(value):
    # Solo aceptamos strings; cualquier otro tipo cae a "hoy"
    return value if isinstance(value, str) and value.strip() else None


# --------------------------
#  API
# --------------------------


@require_GET
def api_daily(request):
    """
    Día anclado y un token opaco de la película del día.
    El token permite al cliente saber si cambió la película, no cuál es.
    """
    game = get_game()
    fecha = _fecha_param(request.GET.get("date"))
    try:
        dia = game.dia(fecha)
        token = game.token_del_dia(fecha)
    except ValueError:
        return _error("Fecha inválida", 400)
    except CatalogoVacioError as e:
        logger.error("api_daily: %s", e)
        return _error(str(e), 503)

    return JsonResponse({"date": dia.isoformat(), "filmIdMasked": token})


@csrf_exempt
@require_POST
def api_guess(request):
    """
    Registra un intento y devuelve solo lo que comparte con la secreta.
    Body JSON: {"filmIdGuess": id, "date": "YYYY-MM-DD" (opcional)}
    """
    try:
        body = json.loads(request.body or b"{}")
    except ValueError:
        return _error("JSON inválido", 400)
    if not isinstance(body, dict):
        return _error("JSON inválido", 400)

    game = get_game()
    try:
        res = game.evaluar_intento(body.get("filmIdGuess"), _fecha_param(body.get("date")))
    except PeliculaDesconocidaError:
        return _error("Unknown filmIdGuess", 400)
    except ValueError:
        return _error("Fecha inválida", 400)
    except CatalogoVacioError as e:
        logger.error("api_guess: %s", e)
        return _error(str(e), 503)

    return JsonResponse(res.as_payload(), json_dumps_params={"ensure_ascii": False})


@require_GET
def api_search(request):
    """Sugerencias para el buscador (título original o localizado)."""
    q = (request.GET.get("q") or "").strip()
    try:
        limit = int(request.GET.get("limit", SEARCH_LIMIT))
    except ValueError:
        limit = SEARCH_LIMIT
    limit = max(1, min(limit, 100))

    results = get_game().catalog.search(q, limit=limit)
    return JsonResponse({"results": results}, json_dumps_params={"ensure_ascii": False})


@require_GET
def api_masked(request):
    game = get_game()
    try:
        data = game.creditos_enmascarados(_fecha_param(request.GET.get("date")))
    except ValueError:
        return _error("Fecha inválida", 400)
    except CatalogoVacioError as e:
        logger.error("api_masked: %s", e)
        return _error(str(e), 503)
    return JsonResponse(data, json_dumps_params={"ensure_ascii": False})


@require_GET
def api_stats(request):
    return JsonResponse(get_game().catalog.stats())
