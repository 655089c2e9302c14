from django.urls import path
from . import views

urlpatterns = [
    # Products
    path('products/', views.ProductCreateView.as_view(), name='product-create'),
    path('products/list/', views.ProductListView.as_view(), name='product-list'),
    path('products/slug/<slug:slug>/', views.ProductBySlugView.as_view(), name='product-by-slug'),
    path('products/<uuid:pk>/', views.ProductDetailView.as_view(), name='product-detail'),

    # Collections
    path('collections/', views.CollectionListView.as_view(), name='collection-list'),
]
