from django.core.management.base import BaseCommand, CommandError
from filmgame.apps import get_game
from filmgame.services.daily import CatalogoVacioError

class Command(BaseCommand):
    help = "Muestra la película secreta del día (según la selección determinística)."

    def add_arguments(self, parser):
        parser.add_argument("--date", help="Fecha YYYY-MM-DD (default: hoy en el día anclado)")

    def handle(self, *args, **opts):
        game = get_game()
        fecha = opts.get("date")
        try:
            dia = game.dia(fecha)
            peli = game.pelicula_del_dia(fecha)
        except ValueError:
            raise CommandError(f"Fecha inválida: {fecha}")
        except CatalogoVacioError as e:
            raise CommandError(str(e))
        self.stdout.write(self.style.SUCCESS(f"{dia} → {peli} [id={peli.id}]"))
