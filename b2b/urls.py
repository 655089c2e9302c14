from django.urls import path
from . import views

urlpatterns = [
    path('quote/', views.QuoteCreateView.as_view(), name='b2b-quote-create'),
    path('quotes/', views.QuoteListView.as_view(), name='b2b-quote-list'),
    path('quotes/<uuid:pk>/approve/', views.QuoteApproveView.as_view(), name='b2b-quote-approve'),
]
