from pathlib import Path

from django.conf import settings
from django.core.management.base import BaseCommand, CommandError
from filmgame.services.omdb import OMDbClient, mapear_a_entrada_catalogo, OMDbError
from filmgame.services.catalog import (
    CatalogError,
    movie_from_dict,
    texto_id,
    read_catalog_entries,
    write_catalog_entries,
)


class Command(BaseCommand):
    help = "Añade/actualiza una película del catálogo JSON desde OMDb (por título/año o imdbID)."

    def add_arguments(self, parser):
        g = parser.add_mutually_exclusive_group(required=True)
        g.add_argument("--title", help="Título exacto (OMDb 't=')")
        g.add_argument("--imdb", help="imdbID (p.ej. tt0133093)")
        parser.add_argument("--year", type=int, help="Año (opcional con --title)")
        parser.add_argument("--catalog", help="Ruta del catálogo (default settings.FILMLE_CATALOG_PATH)")

    def handle(self, *args, **opts):
        path = opts.get("catalog") or settings.FILMLE_CATALOG_PATH
        try:
            client = OMDbClient()
            if opts["imdb"]:
                data = client.buscar_por_imdb_id(opts["imdb"])
            else:
                data = client.buscar_por_titulo(opts["title"], opts.get("year"))
        except OMDbError as e:
            raise CommandError(str(e))

        entrada = mapear_a_entrada_catalogo(data)
        if not entrada["id"] or not entrada["title"]:
            raise CommandError("OMDb no devolvió datos suficientes (imdbID/título).")

        if Path(path).exists():
            try:
                entries = read_catalog_entries(path)
            except CatalogError as e:
                raise CommandError(str(e))
        else:
            # Catálogo nuevo
            entries = []

        # Actualiza por id (comparado como str) o agrega al final
        peli = movie_from_dict(entrada)
        for i, raw in enumerate(entries):
            if isinstance(raw, dict) and texto_id(raw.get("id")) == entrada["id"]:
                entries[i] = entrada
                self.stdout.write(self.style.WARNING(f"ACTUALIZADA: {peli}"))
                break
        else:
            entries.append(entrada)
            self.stdout.write(self.style.SUCCESS(f"CREADA: {peli}"))

        write_catalog_entries(path, entries)
        self.stdout.write(self.style.NOTICE(
            f"Catálogo: {len(entries)} películas en {path}. Reinicia el servidor para recargarlo."
        ))
