from django.urls import path
from . import views

app_name = 'policies'

urlpatterns = [
    path('', views.setting_list, name='setting-list'),
    path('<str:key>/', views.setting_detail, name='setting-detail'),
]
