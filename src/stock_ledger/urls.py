from django.urls import path

from . import views

urlpatterns = [
    path("api/products", views.products, name="products"),
    path("api/borrow", views.borrow, name="borrow"),
    path("api/return", views.return_item, name="return"),
]
