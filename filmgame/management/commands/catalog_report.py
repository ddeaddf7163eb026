from pathlib import Path

from django.core.management.base import BaseCommand
from filmgame.apps import get_game
from filmgame.services.reports import FORMATOS, get_formato


class Command(BaseCommand):
    help = "Exporta el catálogo cargado como CSV o PDF."

    def add_arguments(self, parser):
        parser.add_argument("--format", dest="kind", default="csv",
                            help=f"Formato: {', '.join(sorted(FORMATOS))} (default csv)")
        parser.add_argument("--out", help="Ruta de salida (default catalogo.<ext>)")

    def handle(self, *args, **opts):
        formato = get_formato(opts["kind"])
        out_path = Path(opts.get("out") or f"catalogo.{formato.extension}")

        catalog = get_game().catalog
        out_path.write_bytes(formato.generar(catalog))
        self.stdout.write(self.style.SUCCESS(
            f"OK: {len(catalog)} películas → {out_path.resolve()} ({formato.content_type})"
        ))
