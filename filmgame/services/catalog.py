from __future__ import annotations

import json
import logging
import unicodedata
from pathlib import Path
from typing import Iterable, Iterator

from ..models import CAMPOS_LISTA, Movie

logger = logging.getLogger(__name__)

SEARCH_LIMIT = 20


class CatalogError(RuntimeError):
    """El archivo del catálogo no se pudo leer o tiene entradas inválidas."""


# =========================
# Normalización
# =========================
def texto_id(value) -> str:
    # 1.0 -> "1", igual que los ids enteros
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    return str(value)


def _lista(value) -> tuple[str, ...]:
    if not isinstance(value, list):
        return ()
    return tuple(str(v) for v in value)


def _anio(value) -> int | None:
    # bool es subclase de int: no lo aceptamos como año
    if isinstance(value, bool) or not isinstance(value, int):
        return None
    return value


def _texto_opcional(value) -> str | None:
    if value is None:
        return None
    return str(value)


def movie_from_dict(raw: dict) -> Movie:
    """
    Convierte una entrada cruda del JSON a Movie.
    - id obligatorio; se compara siempre como str
    - los 8 campos lista quedan como tuplas (vacías si faltan o no son lista)
    """
    if not isinstance(raw, dict):
        raise CatalogError(f"Entrada de catálogo inválida: {raw!r}")
    movie_id = raw.get("id")
    if movie_id is None or str(movie_id).strip() == "":
        raise CatalogError(f"Entrada de catálogo sin id: {raw.get('title')!r}")

    return Movie(
        id=texto_id(movie_id),
        title=str(raw.get("title") or ""),
        title_pt=_texto_opcional(raw.get("title_pt")),
        release_year=_anio(raw.get("release_year")),
        **{campo: _lista(raw.get(campo)) for campo in CAMPOS_LISTA},
    )


def normalizar_texto(s: str | None) -> str:
    s = str(s or "").lower()
    s = unicodedata.normalize("NFD", s)
    return "".join(ch for ch in s if not unicodedata.combining(ch))


# =========================
# Catálogo (solo lectura)
# =========================
class Catalog:
    """
    Colección ordenada e inmutable de películas.
    Se construye una vez por proceso y se inyecta donde haga falta.
    """

    def __init__(self, movies: Iterable[Movie] = ()):
        self._movies: tuple[Movie, ...] = tuple(movies)
        index: dict[str, Movie] = {}
        for m in self._movies:
            # con ids duplicados gana la primera aparición
            index.setdefault(m.id, m)
        self._by_id = index

    @classmethod
    def from_entries(cls, entries: Iterable[dict]) -> "Catalog":
        return cls(movie_from_dict(e) for e in entries)

    def __len__(self) -> int:
        return len(self._movies)

    def __iter__(self) -> Iterator[Movie]:
        return iter(self._movies)

    def __getitem__(self, idx: int) -> Movie:
        return self._movies[idx]

    @property
    def movies(self) -> tuple[Movie, ...]:
        return self._movies

    def get(self, movie_id) -> Movie | None:
        if movie_id is None:
            return None
        return self._by_id.get(texto_id(movie_id))

    def resolve(self, ids: Iterable) -> list[Movie]:
        """Resuelve ids contra el catálogo, descartando los que no existen."""
        out: list[Movie] = []
        for movie_id in ids:
            movie = self.get(movie_id)
            if movie is not None:
                out.append(movie)
        return out

    def search(self, q: str | None, limit: int = SEARCH_LIMIT) -> list[dict]:
        """
        Búsqueda por subcadena en título original o localizado,
        sin distinguir mayúsculas ni acentos. Respeta el orden del catálogo.
        """
        nq = normalizar_texto((q or "").strip())
        if not nq or limit <= 0:
            return []

        results = []
        for m in self._movies:
            if nq in normalizar_texto(m.title) or (
                m.title_pt and nq in normalizar_texto(m.title_pt)
            ):
                results.append(
                    {
                        "id": m.id,
                        "title": m.display_title,
                        "orig": m.title,
                        "year": m.release_year,
                    }
                )
                if len(results) >= limit:
                    break
        return results

    def stats(self) -> dict:
        with_pt = sum(1 for m in self._movies if (m.title_pt or "").strip())
        return {"total": len(self._movies), "with_title_pt": with_pt}


# =========================
# Carga desde disco
# =========================
def read_catalog_entries(path: str | Path) -> list[dict]:
    path = Path(path)
    try:
        with path.open(encoding="utf-8") as fh:
            data = json.load(fh)
    except FileNotFoundError:
        raise CatalogError(f"No se encontró el catálogo: {path}")
    except (OSError, ValueError) as e:
        raise CatalogError(f"No se pudo leer el catálogo {path}: {e}")
    if not isinstance(data, list):
        raise CatalogError(f"El catálogo {path} debe ser una lista JSON")
    return data


def load_catalog(path: str | Path) -> Catalog:
    catalog = Catalog.from_entries(read_catalog_entries(path))
    logger.info("Catálogo cargado: %d películas desde %s", len(catalog), path)
    return catalog


def write_catalog_entries(path: str | Path, entries: list[dict]) -> None:
    path = Path(path)
    with path.open("w", encoding="utf-8") as fh:
        json.dump(entries, fh, ensure_ascii=False, indent=2)
        fh.write("\n")


def load_curated_ids(path: str | Path | None) -> list[str]:
    """
    Lista curada opcional (JSON con ids). Cualquier fallo de lectura
    degrada a lista vacía: la selección cae al catálogo completo.
    """
    if not path:
        return []
    try:
        with Path(path).open(encoding="utf-8") as fh:
            data = json.load(fh)
    except (OSError, ValueError) as e:
        logger.warning("Lista curada no disponible (%s): %s", path, e)
        return []
    if not isinstance(data, list):
        logger.warning("Lista curada ignorada, no es una lista JSON: %s", path)
        return []
    return [texto_id(x) for x in data if x is not None]
