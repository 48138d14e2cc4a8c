from django.urls import path

from . import views

urlpatterns = [
    path("orders/", views.orders, name="orders"),
    path("health/database/", views.health_database, name="health_database"),
]
