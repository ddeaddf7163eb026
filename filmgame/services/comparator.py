from __future__ import annotations
from dataclasses import dataclass, field

from ..models import CAMPOS_LISTA, Movie, RelacionAnio


# =========================
# Resultado que devolvemos a la API
# =========================
@dataclass
class ResultadoIntento:
    es_correcto: bool
    overlap: dict = field(default_factory=dict)
    relacion_anio: RelacionAnio | None = None
    anio_intento: int | None = None

    # Solo se completa cuando el intento es correcto
    pelicula: Movie | None = None

    def as_payload(self) -> dict:
        payload = {
            "isCorrect": self.es_correcto,
            "overlap": {k: (list(v) if isinstance(v, tuple) else v) for k, v in self.overlap.items()},
            "yearRelation": self.relacion_anio.value if self.relacion_anio else None,
            "guessYear": self.anio_intento,
        }
        if self.es_correcto and self.pelicula is not None:
            payload["film"] = self.pelicula.to_dict()
        return payload


# =========================
# Utilidades
# =========================
def _interseccion(adiv: tuple[str, ...], sec: tuple[str, ...]) -> tuple[str, ...]:
    # orden del intento, comparación exacta (distingue mayúsculas)
    if not adiv or not sec:
        return ()
    objetivo = set(sec)
    return tuple(x for x in adiv if x in objetivo)


def _relacion_anio(adiv: int | None, sec: int | None) -> RelacionAnio | None:
    if adiv is None or sec is None:
        return None
    if adiv == sec:
        return RelacionAnio.EQ
    if adiv < sec:
        return RelacionAnio.LT
    return RelacionAnio.GT


# =========================
# Comparar intento
# =========================
def comparar_intento(adivinada: Movie, secreta: Movie) -> ResultadoIntento:
    """
    Compara el intento con la película secreta.
    Nunca expone datos de la secreta que no estén también en el intento:
    el año exacto solo aparece si coincide, y la ficha completa solo si acierta.
    """
    overlap: dict = {}
    for campo in CAMPOS_LISTA:
        comunes = _interseccion(adivinada.valores(campo), secreta.valores(campo))
        if comunes:
            overlap[campo] = comunes

    relacion = _relacion_anio(adivinada.release_year, secreta.release_year)
    if relacion == RelacionAnio.EQ:
        overlap["release_year"] = adivinada.release_year

    es_ok = adivinada.id == secreta.id

    return ResultadoIntento(
        es_correcto=es_ok,
        overlap=overlap,
        relacion_anio=relacion,
        anio_intento=adivinada.release_year,
        pelicula=secreta if es_ok else None,
    )


# =========================
# Créditos enmascarados
# =========================
def _mascara(texto: str) -> str:
    out = []
    for ch in texto:
        if ch.isalpha() and ch.isupper():
            out.append("X")
        elif ch.isalpha() and ch.islower():
            out.append("x")
        else:
            out.append(ch)
    return "".join(out)


def enmascarar_creditos(secreta: Movie) -> dict[str, list[dict]]:
    """
    Forma de los créditos de la secreta (mayúsculas -> X, minúsculas -> x).
    La clave es posicional para no llevar el valor real en la respuesta.
    """
    return {
        campo: [
            {"key": f"{campo}-{i}", "mask": _mascara(valor)}
            for i, valor in enumerate(secreta.valores(campo))
        ]
        for campo in CAMPOS_LISTA
    }
