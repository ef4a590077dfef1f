"""URL configuration for the blog app.

This module defines the URL patterns for the app's views. It also
specifies the ``app_name`` to allow namespacing from the project URL
configuration.
"""

from django.urls import path

from . import views

app_name = 'blog'

urlpatterns = [
    path('blogs/', views.post_list, name='post_list'),
    path('blogs/<slug:slug>/', views.post_detail, name='post_detail'),
    path('api/preview/', views.preview, name='preview'),
    path('api/revalidate/', views.revalidate, name='revalidate'),
]
