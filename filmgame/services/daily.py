from __future__ import annotations

import logging
from datetime import date, datetime, timedelta, timezone as dt_timezone
from typing import Iterable

from django.utils import timezone

from ..models import Movie
from .catalog import Catalog

logger = logging.getLogger(__name__)

# =========================
# Config de la selección
# =========================
DAY_OFFSET_HOURS = -3  # el "día" se ancla a UTC-3 fijo, sin horario de verano
DAY_SALT = "v1"  # cambiar el salt rebaraja el mapeo día -> película
HASH_MOD = 2**32


class CatalogoVacioError(RuntimeError):
    """No hay películas candidatas para elegir la del día."""


# =========================
# Día anclado + hash
# =========================
def dia_anclado(
    fecha: date | datetime | str | None = None, offset_horas: int = DAY_OFFSET_HOURS
) -> date:
    """
    Normaliza la entrada al día calendario del offset fijo.
    - date: ya es un día, se usa tal cual
    - datetime con tz: se convierte al offset
    - datetime naive: se asume UTC
    - str: 'YYYY-MM-DD' es un día; otro ISO se parsea como datetime
    - None: el instante actual
    """
    if fecha is None:
        fecha = timezone.now()

    if isinstance(fecha, str):
        texto = fecha.strip()
        try:
            return date.fromisoformat(texto)
        except ValueError:
            fecha = datetime.fromisoformat(texto)  # ValueError si no es ISO

    if isinstance(fecha, datetime):
        if fecha.tzinfo is None:
            fecha = fecha.replace(tzinfo=dt_timezone.utc)
        tz = dt_timezone(timedelta(hours=offset_horas))
        try:
            return fecha.astimezone(tz).date()
        except OverflowError as e:
            # p.ej. 0001-01-01T00:00 en UTC-3 cae antes del año 1
            raise ValueError(f"Fecha fuera de rango: {fecha.isoformat()}") from e

    if isinstance(fecha, date):
        return fecha

    raise TypeError(f"Fecha no soportada: {fecha!r}")


def clave_del_dia(
    fecha: date | datetime | str | None = None,
    offset_horas: int = DAY_OFFSET_HOURS,
    salt: str = DAY_SALT,
) -> str:
    return f"{dia_anclado(fecha, offset_horas).isoformat()}|{salt}"


def hash_polinomial(texto: str) -> int:
    # hash = hash * 31 + codepoint, aritmética sin signo de 32 bits
    h = 0
    for ch in texto:
        h = (h * 31 + ord(ch)) % HASH_MOD
    return h


# =========================
# Selección de la película del día
# =========================
def seleccionar_pelicula_diaria(
    fecha: date | datetime | str | None,
    catalogo: Catalog,
    curated_ids: Iterable = (),
    override_id=None,
    offset_horas: int = DAY_OFFSET_HOURS,
    salt: str = DAY_SALT,
) -> Movie:
    """
    Devuelve la película secreta para la fecha.
    Función pura de (fecha, catálogo, lista curada, override): cualquier
    réplica calcula la misma película sin guardar estado.
    """
    if override_id is not None and str(override_id).strip():
        forced = catalogo.get(str(override_id).strip())
        if forced is not None:
            return forced
        logger.warning("Override %r no existe en el catálogo; se ignora.", override_id)

    pool = catalogo.resolve(curated_ids) or list(catalogo)
    if not pool:
        raise CatalogoVacioError("No hay películas cargadas en el catálogo.")

    h = hash_polinomial(clave_del_dia(fecha, offset_horas, salt))
    return pool[h % len(pool)]
