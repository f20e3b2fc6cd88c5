"""Account routes for the signed-in user under /api/v1/account."""

from django.urls import path

from .views import CurrentUserView, ProfileUpdateView

urlpatterns = [
    path("me/", CurrentUserView.as_view(), name="current-user"),
    path("profile/", ProfileUpdateView.as_view(), name="profile-update"),
]
