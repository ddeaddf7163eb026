from __future__ import annotations
from dataclasses import dataclass, field
from datetime import date, datetime
import logging

from django.conf import settings
from django.utils.crypto import salted_hmac

from ..models import Movie
from .catalog import Catalog, CatalogError, load_catalog, load_curated_ids
from .comparator import ResultadoIntento, comparar_intento, enmascarar_creditos
from .daily import (
    DAY_OFFSET_HOURS,
    DAY_SALT,
    dia_anclado,
    seleccionar_pelicula_diaria,
)

logger = logging.getLogger(__name__)

Fecha = date | datetime | str | None


class PeliculaDesconocidaError(LookupError):
    """El id del intento no existe en el catálogo (error del cliente)."""


# =========================
# Contexto del juego (inyectado)
# =========================
@dataclass(frozen=True)
class GameContext:
    """
    Todo lo que necesita la selección diaria, construido una sola vez.
    Las vistas y comandos lo reciben ya armado; los tests lo reemplazan.
    """

    catalog: Catalog
    curated_ids: tuple[str, ...] = field(default=())
    override_id: str | None = None
    offset_horas: int = DAY_OFFSET_HOURS
    salt: str = DAY_SALT

    def dia(self, fecha: Fecha = None) -> date:
        return dia_anclado(fecha, self.offset_horas)

    def pelicula_del_dia(self, fecha: Fecha = None) -> Movie:
        return seleccionar_pelicula_diaria(
            fecha,
            self.catalog,
            curated_ids=self.curated_ids,
            override_id=self.override_id,
            offset_horas=self.offset_horas,
            salt=self.salt,
        )

    def token_del_dia(self, fecha: Fecha = None) -> str:
        # Identifica la película del día sin revelarla (HMAC con SECRET_KEY)
        secreta = self.pelicula_del_dia(fecha)
        return salted_hmac("filmgame.daily", secreta.id).hexdigest()[:16]

    def evaluar_intento(self, guess_id, fecha: Fecha = None) -> ResultadoIntento:
        adivinada = self.catalog.get(guess_id)
        if adivinada is None:
            raise PeliculaDesconocidaError(f"Película desconocida: {guess_id!r}")
        secreta = self.pelicula_del_dia(fecha)
        return comparar_intento(adivinada, secreta)

    def creditos_enmascarados(self, fecha: Fecha = None) -> dict:
        return enmascarar_creditos(self.pelicula_del_dia(fecha))


def build_context_from_settings() -> GameContext:
    """
    Arma el contexto con la configuración del proyecto.
    Un catálogo ilegible deja el juego sin películas (503 en la API),
    pero no impide arrancar el proceso.
    """
    path = getattr(settings, "FILMLE_CATALOG_PATH", None)
    try:
        catalog = load_catalog(path) if path else Catalog()
    except CatalogError as e:
        logger.error("%s", e)
        catalog = Catalog()

    curated = load_curated_ids(getattr(settings, "FILMLE_CURATED_PATH", None))
    if curated:
        logger.info("Lista curada: %d ids", len(curated))

    override = (getattr(settings, "FILMLE_OVERRIDE_ID", None) or "").strip() or None
    if override:
        logger.info("Override manual de la película del día activo.")

    return GameContext(
        catalog=catalog,
        curated_ids=tuple(curated),
        override_id=override,
        offset_horas=int(getattr(settings, "FILMLE_DAY_OFFSET_HOURS", DAY_OFFSET_HOURS)),
        salt=str(getattr(settings, "FILMLE_DAY_SALT", DAY_SALT)),
    )
