from django.apps import AppConfig


class FilmgameConfig(AppConfig):
    name = "filmgame"
    verbose_name = "Filmle"

    # Se arma en ready(); los tests pueden reemplazarlo
    game = None

    def ready(self):
        from .services.game_service import build_context_from_settings

        self.game = build_context_from_settings()


def get_game():
    from django.apps import apps

    return apps.get_app_config("filmgame").game
