from django.urls import path
from . import views

app_name = 'users'

urlpatterns = [
    # Authentication
    path('register/', views.register, name='register'),
    path('login/', views.login, name='login'),

    # User profile
    path('user/', views.get_current_user, name='current-user'),

    # Member directory (admin)
    path('members/', views.member_list, name='member-list'),
    path('members/<uuid:member_id>/deactivate/', views.member_deactivate, name='member-deactivate'),
]
