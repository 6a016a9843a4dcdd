"""Public-facing URL patterns."""

from django.urls import path

from ..views import public

urlpatterns = [
    path("", public.HomeView.as_view(), name="home"),
    path("login/", public.LoginView.as_view(), name="login"),
    path("logout/", public.LogoutView.as_view(), name="logout"),
    path("register/", public.RegisterView.as_view(), name="register"),
    path("studios/", public.StudioListView.as_view(), name="studio_list"),
    path("studios/<int:pk>/", public.StudioDetailView.as_view(), name="studio_detail"),
]
