from django.urls import path
from . import views

app_name = "filmgame"

urlpatterns = [
    # API
    path("api/daily/", views.api_daily, name="api_daily"),
    path("api/guess/", views.api_guess, name="api_guess"),
    path("api/search/", views.api_search, name="api_search"),
    path("api/masked/", views.api_masked, name="api_masked"),
    path("api/stats/", views.api_stats, name="api_stats"),
]
