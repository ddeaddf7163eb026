# filmgame/models.py
from __future__ import annotations
from dataclasses import dataclass, field
from django.db import models


# =========================
# Enums
# =========================
class RelacionAnio(models.TextChoices):
    LT = "lt", "Antes"  # el año del intento es ANTERIOR al de la secreta
    GT = "gt", "Después"  # el año del intento es POSTERIOR al de la secreta
    EQ = "eq", "Igual"


# Los ocho campos multivaluados del catálogo, en el orden en que se comparan
CAMPOS_LISTA: tuple[str, ...] = (
    "stars",
    "directors",
    "writers",
    "production_companies",
    "countries_origin",
    "filming_locations",
    "genres",
    "languages",
)


# =========================
# Película
# =========================
@dataclass(frozen=True)
class Movie:
    """
    Registro inmutable de una película del catálogo.
    La identidad siempre es str (los ids numéricos del JSON se convierten).
    Las listas nunca son None: vacías si faltan en el origen.
    """

    id: str
    title: str
    title_pt: str | None = None
    release_year: int | None = None

    stars: tuple[str, ...] = field(default=())
    directors: tuple[str, ...] = field(default=())
    writers: tuple[str, ...] = field(default=())
    production_companies: tuple[str, ...] = field(default=())
    countries_origin: tuple[str, ...] = field(default=())
    filming_locations: tuple[str, ...] = field(default=())
    genres: tuple[str, ...] = field(default=())
    languages: tuple[str, ...] = field(default=())

    def __str__(self):
        if self.release_year is None:
            return self.title
        return f"{self.title} ({self.release_year})"

    @property
    def display_title(self) -> str:
        # Título localizado si existe, si no el original
        pt = (self.title_pt or "").strip()
        return pt or self.title

    def valores(self, campo: str) -> tuple[str, ...]:
        return getattr(self, campo)

    def to_dict(self) -> dict:
        data = {
            "id": self.id,
            "title": self.title,
            "title_pt": self.title_pt,
            "release_year": self.release_year,
        }
        for campo in CAMPOS_LISTA:
            data[campo] = list(self.valores(campo))
        return data
