from __future__ import annotations

import csv
import io
from typing import Callable, Iterable, NamedTuple

from reportlab.lib.pagesizes import A4
from reportlab.lib.units import cm
from reportlab.pdfgen import canvas

from ..models import CAMPOS_LISTA, Movie

MAX_FILAS_PDF = 2000
COLUMNAS = ("id", "title", "title_pt", "release_year", *CAMPOS_LISTA)


def reporte_csv(peliculas: Iterable[Movie]) -> bytes:
    """Ficha completa por fila; los campos lista van separados por '; '."""
    buf = io.StringIO()
    w = csv.writer(buf)
    w.writerow(COLUMNAS)
    for p in peliculas:
        data = p.to_dict()
        w.writerow(
            "; ".join(v) if isinstance(v, list) else ("" if v is None else v)
            for v in (data[c] for c in COLUMNAS)
        )
    # UTF-8 con BOM para que Excel lo reconozca bien
    return ("\ufeff" + buf.getvalue()).encode("utf-8")


def reporte_pdf(peliculas: Iterable[Movie]) -> bytes:
    buf = io.BytesIO()
    c = canvas.Canvas(buf, pagesize=A4)
    _, height = A4
    y = height - 2*cm

    c.setFont("Helvetica-Bold", 12)
    c.drawString(2*cm, y, "Catálogo de películas")
    y -= 1*cm
    c.setFont("Helvetica", 10)

    for idx, p in enumerate(peliculas):
        if idx >= MAX_FILAS_PDF:
            break
        c.drawString(2*cm, y, f"{p.id} - {p} [{', '.join(p.genres)}]"[:110])
        y -= 0.6*cm
        if y < 2*cm:
            c.showPage()
            y = height - 2*cm
            c.setFont("Helvetica", 10)

    c.save()
    return buf.getvalue()


class Formato(NamedTuple):
    extension: str
    content_type: str
    generar: Callable[[Iterable[Movie]], bytes]


FORMATOS: dict[str, Formato] = {
    "csv": Formato("csv", "text/csv", reporte_csv),
    "pdf": Formato("pdf", "application/pdf", reporte_pdf),
}


def get_formato(kind: str | None) -> Formato:
    # Formato desconocido -> CSV
    return FORMATOS.get((kind or "").strip().lower(), FORMATOS["csv"])
