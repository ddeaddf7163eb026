import json
from collections import Counter
from pathlib import Path

from django.core.management.base import BaseCommand, CommandError
from filmgame.apps import get_game
from filmgame.services.curation import PRIMARY_GENRE_CAP_FRACTION, construir_lista_curada

"""
Genera la lista curada (JSON con ids) equilibrada por décadas y géneros
a partir del catálogo cargado.

Uso típico:
  python manage.py curated_build --top 365 --out curated.json

Luego apunta FILMLE_CURATED_PATH al archivo generado.
"""


class Command(BaseCommand):
    help = "Genera una lista curada de ids equilibrada por décadas y géneros."

    def add_arguments(self, parser):
        parser.add_argument("--top", type=int, default=365, help="Cantidad destino (default 365)")
        parser.add_argument("--out", type=str, default="curated.json", help="Ruta salida JSON")
        parser.add_argument("--genre-cap", type=float, default=PRIMARY_GENRE_CAP_FRACTION,
                            help="Fracción máx. del cupo de una década por género primario")
        parser.add_argument("--print-stats", action="store_true", help="Muestra resumen por década/género.")

    def handle(self, *args, **opts):
        catalog = get_game().catalog
        if len(catalog) == 0:
            raise CommandError("El catálogo está vacío; revisa FILMLE_CATALOG_PATH.")

        ids = construir_lista_curada(catalog, int(opts["top"]), float(opts["genre_cap"]))
        out_path = Path(opts["out"])
        with out_path.open("w", encoding="utf-8") as fh:
            json.dump(ids, fh, ensure_ascii=False, indent=2)

        if opts["print_stats"]:
            movies = catalog.resolve(ids)
            by_dec = Counter(
                f"{(m.release_year // 10) * 10}s" if m.release_year is not None else "sin año"
                for m in movies
            )
            by_g = Counter(m.genres[0] if m.genres else "Unknown" for m in movies)
            self.stdout.write("---- RESUMEN ----")
            self.stdout.write("Por década:")
            for d in sorted(by_dec):
                self.stdout.write(f"  {d}: {by_dec[d]}")
            self.stdout.write("Por género (primario):")
            for g, c in by_g.most_common():
                self.stdout.write(f"  {g}: {c}")

        self.stdout.write(self.style.SUCCESS(f"OK: escrito {out_path.resolve()} con {len(ids)} ids."))
