from django.urls import include, path

urlpatterns = [
    path("api/", include("jeevan_rakth.urls")),
]
